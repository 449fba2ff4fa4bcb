class QOIError(ValueError):
    """Base class for every error raised by the codec."""


class ShortInput(QOIError):
    pass


class MagicMismatch(QOIError):
    pass


class IllegalWidth(QOIError):
    pass


class IllegalHeight(QOIError):
    pass


class IllegalChannels(QOIError):
    pass


class IllegalColorSpace(QOIError):
    pass


class IllegalDataLength(QOIError):
    pass
