class LahmanError(RuntimeError):
    """Base class for errors raised by lahmandb itself."""


class MissingDependencyError(LahmanError, ImportError):
    """A dataset or driver package needed for the requested operation is not installed."""

    def __init__(self, package: str, extra: str | None = None) -> None:
        hint = f"pip install 'lahmandb[{extra}]'" if extra else f"pip install {package}"
        super().__init__(f"Please install the {package} package ({hint})")
        self.package = package
        self.extra = extra


class UnknownBackendError(LahmanError, ValueError):
    def __init__(self, backend: str) -> None:
        super().__init__(f"Unknown src {backend}")
        self.backend = backend


class UnknownTableError(LahmanError, KeyError):
    def __init__(self, table: str, source: str) -> None:
        super().__init__(f"{source} does not provide table {table!r}")
        self.table = table
        self.source = source

    def __str__(self) -> str:
        return self.args[0]
