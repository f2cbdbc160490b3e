"""Domain Errors

Typed exceptions raised by pure domain rules. Use cases translate them into
``libs.result.Error`` values using the ``code`` attribute.
"""


class InvoicingError(Exception):
    code = "INVOICING_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailedError(InvoicingError):
    code = "VALIDATION_FAILED"


class InvalidTransitionError(InvoicingError):
    code = "INVALID_TRANSITION"


class DuplicateInvoiceNumberError(InvoicingError):
    code = "DUPLICATE_INVOICE_NUMBER"

    def __init__(self, owner_id: str, invoice_number: str):
        super().__init__(
            f"Invoice number {invoice_number} already exists for owner {owner_id}"
        )
        self.owner_id = owner_id
        self.invoice_number = invoice_number


class InvoiceNumberExhaustedError(InvoicingError):
    code = "INVOICE_NUMBER_EXHAUSTED"
