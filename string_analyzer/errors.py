class StringAnalyzerError(Exception):
    """Base class for domain errors raised by the service layer."""


class StringAlreadyExistsError(StringAnalyzerError):
    def __init__(self):
        super().__init__("String already exists in the system")


class StringNotFoundError(StringAnalyzerError):
    def __init__(self):
        super().__init__("String does not exist in the system")
