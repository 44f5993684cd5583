import sys

__all__ = [
    "ExceptionWithMsg", "EncoderError", "ConfigurationError",
    "ChassisTypeInvalid", "UuidInvalid", "MacAddressInvalid", "FieldTooLong",
    "MissingField", "LengthExceeded", "SizeExceeded",
    "Logger", "StdErrLogger",
]

class ExceptionWithMsg(Exception):
    """ Typed Exception for MYPY """
    message = None # type: str
    def __init__(self, message): # type: (str) -> None
        self.message = message
        super(ExceptionWithMsg, self).__init__(message)

class EncoderError(ExceptionWithMsg):
    """ Raised on fatal error when building FRU image. """
    pass

class ConfigurationError(EncoderError):
    """ Required configuration value is missing or invalid. """
    pass

class ChassisTypeInvalid(ConfigurationError):
    """ Chassis type is missing, zero or not a byte. """
    pass

class UuidInvalid(ConfigurationError):
    """ UUID is missing or not in xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx form. """
    pass

class MacAddressInvalid(ConfigurationError):
    """ MAC address is missing or not exactly 12 hexadecimal digits. """
    pass

class FieldTooLong(ConfigurationError):
    """ String does not fit into fixed width field of a multi-record. """
    pass

class MissingField(ConfigurationError):
    """ Mandatory value was not configured. """
    pass

class LengthExceeded(EncoderError):
    """ Value does not fit into declared or available field width. """
    pass

class SizeExceeded(EncoderError):
    """ Assembled image is larger than allowed maximum. """
    pass

class Logger(object):
    """ Base logger for use with frubuild.Encoder """
    def info(self, msg): # type: (str) -> None
        """ Information level message (defaults applied, progress). """
        raise NotImplementedError()

    def warning(self, msg): # type: (str) -> None
        """ Warning level message (image is valid, but may be misinterpreted). """
        raise NotImplementedError()

class StdErrLogger(Logger):
    """ Basic implementation of frubuild.Logger, that logs to sys.stderr. """
    def _log(self, prefix, msg): # type: (str, str) -> None
        sys.stderr.write("%s: %s\n" % (prefix, msg))

    def info(self, msg): # type: (str) -> None
        self._log('Inf', msg)

    def warning(self, msg): # type: (str) -> None
        self._log('Wrn', msg)
