class PersistenceError(Exception):
    """The task store could not complete an operation.

    Raised by the crud layer in place of the driver's ``SQLAlchemyError``
    (available as ``__cause__``) after the session has been rolled back.
    """

    def __init__(self, operation: str, message: str = "Database error occurred"):
        super().__init__(f"{message} while trying to {operation}")
        self.operation = operation
