import typing

from buildinit.exceptions.base import BuildInitException as _BuildInitException


class BuildInitUserException(_BuildInitException):
    _ERROR_CODE = "USER:Unknown"


class BuildInitValueException(BuildInitUserException, ValueError):
    _ERROR_CODE = "USER:ValueError"

    @classmethod
    def _create_verbose_message(cls, received_value, error_message):
        return "Value error!  Received: {}. {}".format(received_value, error_message)

    def __init__(self, received_value, error_message):
        super(BuildInitValueException, self).__init__(self._create_verbose_message(received_value, error_message))


class BuildInitAssertion(BuildInitUserException, AssertionError):
    _ERROR_CODE = "USER:AssertionError"


class ReferenceParseError(BuildInitUserException, ValueError):
    """Raised when a string is not a valid container image reference."""

    _ERROR_CODE = "USER:ReferenceParseError"

    def __init__(self, reference: str, reason: str):
        self.reference = reference
        self.reason = reason
        super(ReferenceParseError, self).__init__(reason)

    def __str__(self):
        return self.reason


class UnresolvedBuilderImagesError(BuildInitUserException):
    """
    Raised when images and builders are left over after automatic matching and no explicit pairing was given.
    """

    _ERROR_CODE = "USER:UnresolvedBuilderImages"

    def __init__(self, images: typing.List[str], builders: typing.List[str]):
        self.images = images
        self.builders = builders
        super(UnresolvedBuilderImagesError, self).__init__(
            "unable to automatically resolve builder/image pairs for images [{}] and builders [{}]; "
            "pass explicit pairs with --artifact=<path>=<image>".format(", ".join(images), ", ".join(builders))
        )
