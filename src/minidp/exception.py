"""
Exceptions for minidp
"""


class MinIdPError(Exception):
    """
    Base minidp exception
    """
    pass


class MinIdPConfigurationError(MinIdPError):
    """
    minidp configuration error
    """
    pass


class MinIdPStageError(MinIdPError):
    """
    Base class for errors raised by a stage of the SSO pipeline.

    Every stage error aborts the request it was raised for, and carries the
    name of the stage that failed so it can be reported.
    """
    stage = None

    def __init__(self, message, stage=None):
        """
        :type message: str
        :type stage: str

        :param message: A description of the failure
        :param stage: Overrides the default stage name of the error class
        """
        super().__init__(message)
        if stage is not None:
            self.stage = stage

    def __str__(self):
        return "[{stage}] {message}".format(stage=self.stage, message=super().__str__())


class DecodeError(MinIdPStageError):
    """
    The SAMLRequest parameter is missing or is not valid base64.
    """
    stage = "decode"


class DecompressError(MinIdPStageError):
    """
    The decoded SAMLRequest is not a complete raw DEFLATE stream.
    """
    stage = "decompress"


class ParseError(MinIdPStageError):
    """
    The request is not XML, or not an AuthnRequest this IdP can answer.
    """
    stage = "parse"


class RenderError(MinIdPStageError):
    """
    A template failed to render, or a value handed to it holds characters
    that can't be written to XML.
    """
    stage = "render"
