class SpinError(Exception):
    retryable = False


class SpinInvalidFormatError(SpinError):
    pass


class SpinCodeNotFoundError(SpinError):
    pass


class SpinCodeAlreadyUsedError(SpinError):
    pass


class SpinStorageUnavailableError(SpinError):
    retryable = True


class SpinCodeGenerationError(SpinError):
    retryable = True


class SpinPrizeTableError(SpinError, ValueError):
    pass
