class RemoteServiceUnavailable(Exception):
    """The remote scoring service could not produce a usable answer."""


class GatewayTimeout(RemoteServiceUnavailable):
    pass


class RemoteError(RemoteServiceUnavailable):
    pass


class ResponseParseError(RemoteError):
    """The model replied, but not with a valid match report."""


class UnsupportedFileFormat(ValueError):
    pass


class PersistenceFailure(Exception):
    pass


class JobNotFound(LookupError):
    def __init__(self, job_id: int):
        super().__init__(f"Job {job_id} not found.")
        self.job_id = job_id
