class UpstreamError(Exception):
    """Raised when a third-party API call fails or returns an unusable body."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
