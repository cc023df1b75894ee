class GameCreatorError(Exception):
    """Base class for requests the game pipeline refuses."""


class SessionNotFound(GameCreatorError):
    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


class EmptySubmission(GameCreatorError):
    def __init__(self) -> None:
        super().__init__("Describe the game you want to create")


class SessionBusy(GameCreatorError):
    def __init__(self) -> None:
        super().__init__("A game is already being generated for this session")


class NothingToRegenerate(GameCreatorError):
    def __init__(self) -> None:
        super().__init__("There is no game description to regenerate from")
