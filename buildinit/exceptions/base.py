class _BuildInitCodedExceptionMetaclass(type):
    @property
    def error_code(cls) -> str:
        return cls._ERROR_CODE


class BuildInitException(Exception, metaclass=_BuildInitCodedExceptionMetaclass):
    """
    Base of every buildinit error. Subclasses set ``_ERROR_CODE``, which is exposed as ``type(e).error_code`` and
    used as the title when the CLI reports the error.
    """

    _ERROR_CODE = "UnknownBuildInitException"

    def __str__(self):
        message = ",".join(str(a) for a in self.args) if self.args else "None"
        if self.__cause__:
            message += f" (caused by: {self.__cause__})"
        return f"{type(self).error_code}: {message}"
