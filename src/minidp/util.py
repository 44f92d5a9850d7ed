"""
Python package file for util functions.
"""
import random
import string


def rndstr(size=16, alphabet=""):
    """
    Returns a string of random ascii characters or digits
    :type size: int
    :type alphabet: str
    :param size: The length of the string
    :param alphabet: A string with characters.
    :return: string
    """
    rng = random.SystemRandom()
    if not alphabet:
        alphabet = string.ascii_letters[0:52] + string.digits
    return type(alphabet)().join(rng.choice(alphabet) for _ in range(size))


def new_saml_id():
    """
    Returns an identifier usable as a SAML ID attribute (xs:ID must not
    start with a digit).

    :rtype: str
    """
    return "_" + rndstr(32, string.hexdigits[:16])
