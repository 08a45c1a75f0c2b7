# common/exceptions.py


class DomainError(Exception):
    """Base class for errors raised by services and wizards"""
    default_message = "Something went wrong."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DomainError):
    default_message = "The requested record does not exist."

    def __init__(self, model_name=None, pk=None):
        self.model_name = model_name
        self.pk = pk
        if model_name is not None:
            super().__init__(f"{model_name} with id {pk} does not exist.")
        else:
            super().__init__()


class NotOwnerError(DomainError):
    default_message = "You don't have permission to do that."


class InvalidTransitionError(DomainError):
    default_message = "This action is not available in the current state."
