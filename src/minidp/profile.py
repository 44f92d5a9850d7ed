"""
The identity asserted to service providers, and the providers that supply it.
"""
from .exception import MinIdPConfigurationError

PROFILE_ATTRIBUTES = ("Email", "Username", "FirstName", "LastName", "NickName", "Locale")

DEFAULT_PROFILE = {
    "ID": "U001",
    "Email": "user1@example.com",
    "Username": "user1",
    "FirstName": "User",
    "LastName": "One",
    "NickName": "",
    "Locale": "en",
}


class Profile(object):
    """
    An immutable identity: a subject name identifier and the attributes
    released about it.
    """
    __slots__ = ("ID",) + PROFILE_ATTRIBUTES

    def __init__(self, ID, Email="", Username="", FirstName="", LastName="", NickName="", Locale=""):
        values = dict(ID=ID, Email=Email, Username=Username, FirstName=FirstName,
                      LastName=LastName, NickName=NickName, Locale=Locale)
        for name, value in values.items():
            if not isinstance(value, str):
                raise TypeError("Profile field '{}' must be a string, not {}".format(name, type(value).__name__))
            object.__setattr__(self, name, value)

    def __setattr__(self, key, value):
        raise AttributeError("Profile is immutable")

    @property
    def attributes(self):
        """
        :rtype: list[(str, str)]
        :return: The released attributes as (name, value) pairs, in release order
        """
        return [(name, getattr(self, name)) for name in PROFILE_ATTRIBUTES]

    def to_dict(self):
        return {name: getattr(self, name) for name in self.__slots__}

    @classmethod
    def from_dict(cls, data):
        """
        :type data: dict[str, str]
        :rtype: Profile

        :param data: Profile fields keyed by name
        :return: A profile
        :raise MinIdPConfigurationError: if data has fields a profile doesn't have
        """
        unknown = set(data) - set(cls.__slots__)
        if unknown:
            raise MinIdPConfigurationError(
                "Unknown profile fields: {}".format(", ".join(sorted(unknown)))
            )
        return cls(**data)

    def __eq__(self, other):
        if not isinstance(other, Profile):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash(tuple(getattr(self, name) for name in self.__slots__))

    def __repr__(self):
        return "Profile({})".format(self.to_dict())


class StaticProfileProvider(object):
    """
    Asserts the same profile for every request, whoever sent it.
    """

    def __init__(self, profile):
        """
        :type profile: Profile
        """
        self.profile = profile

    @classmethod
    def from_config(cls, profile_config=None):
        """
        Creates a provider for the default profile, with the fields given in
        profile_config replacing the defaults.

        :type profile_config: dict[str, str] | None
        :rtype: StaticProfileProvider
        """
        data = dict(DEFAULT_PROFILE)
        data.update(profile_config or {})
        try:
            return cls(Profile.from_dict(data))
        except TypeError as e:
            raise MinIdPConfigurationError(str(e)) from e

    def __call__(self, context):
        """
        :type context: minidp.context.Context
        :rtype: Profile
        """
        return self.profile
