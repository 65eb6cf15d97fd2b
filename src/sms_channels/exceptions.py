class UnknownSmsChannelError(ValueError):
    """Raised when a channel code does not match any known vendor client."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"No SMS client implementation for channel code {code!r}")
