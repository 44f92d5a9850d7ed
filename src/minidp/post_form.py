"""
Renders the self-submitting form of the HTTP-POST binding.
"""
from chevron import ChevronError
from chevron import render as render_mustache

from .exception import RenderError
from .saml_util import verify_xml_text

# Values are attribute escaped by the renderer; the destination comes from an untrusted request.
POST_FORM_TEMPLATE = """\
<html>
  <form method="post" action="{{url}}" id="SAMLResponseForm">
    <input type="hidden" name="SAMLResponse" value="{{saml_response}}" />
    <input type="hidden" name="RelayState" value="{{relay_state}}" />
    <input id="SAMLSubmitButton" type="submit" value="Continue" />
  </form>
  <script>
    document.getElementById('SAMLSubmitButton').style.visibility="hidden";
    document.getElementById('SAMLResponseForm').submit();
  </script>
</html>
"""


def render_form(saml_response, destination, relay_state=""):
    """
    :type saml_response: str
    :type destination: str
    :type relay_state: str
    :rtype: str

    :param saml_response: The base64 encoded SAML Response
    :param destination: The ACS URL the form posts to
    :param relay_state: RelayState to echo back to the service provider
    :return: An HTML document posting the response to destination when loaded
    :raise RenderError: if a value holds a character XML does not allow, or the
        template can't be rendered
    """
    data = {
        "url": destination,
        "saml_response": saml_response,
        "relay_state": relay_state or "",
    }
    try:
        for name, value in data.items():
            verify_xml_text(name, value)
    except ValueError as e:
        raise RenderError("Cannot render POST form: {}".format(e)) from e

    try:
        return render_mustache(POST_FORM_TEMPLATE, data)
    except ChevronError as e:
        raise RenderError("Cannot render POST form: {}".format(e)) from e
