""" Error types raised by the receipt processing core """


class ParseError(ValueError):
    """ Raised when a date, time or amount string cannot be parsed """

    def __init__(self, input_value: str, reason: str):
        self.input = input_value
        self.reason = reason
        super().__init__(f"unable to parse {input_value!r}: {reason}")


class ValidationError(ValueError):
    """ Raised when a receipt breaks a structural or semantic rule """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(LookupError):
    """ Raised when no receipt is stored under the requested id """

    def __init__(self, receipt_id: str):
        self.receipt_id = receipt_id
        super().__init__(f"Error: receipt id not found ({receipt_id})")
