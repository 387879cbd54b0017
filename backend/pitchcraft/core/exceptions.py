"""
Error taxonomy for the pitch pipeline.

Every error carries the message shown to the user and the HTTP status the
orchestration layer answers with.  Collaborator code raises these; controllers
catch them and turn them into ``HTTPException``s.
"""


class PitchCraftError(Exception):
    status_code: int = 500
    default_message: str = ""

    def __init__(self, message: str | None = None):
        super().__init__(message if message is not None else self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class IdeaValidationError(PitchCraftError):
    """The idea failed a local precondition; nothing external was called."""

    status_code = 422
    default_message = "Please provide a short description of at least 20 characters."


class GenerationError(PitchCraftError):
    """The AI call failed or returned an incomplete/malformed pitch."""

    status_code = 502
    default_message = "Failed to generate pitch. Please check your API key and connection."


class PersistenceError(PitchCraftError):
    status_code = 503
    default_message = "The pitch database is unavailable. Please try again."


class AuthError(PitchCraftError):
    """Credential rejection.  The message never says *why*."""

    status_code = 401
    default_message = "Something went wrong. Please check your email and password, or try again."


class IntakeBusyError(PitchCraftError):
    status_code = 409
    default_message = "A pitch is already being generated. Please wait for it to finish."
