import pathlib
import typing


PathLike = typing.Union[str, pathlib.Path]


class NonExistentPathError(Exception):
    """A path that should exist does not."""

    def __init__(self, path: PathLike) -> None:
        self.path = path
        """The missing path."""

    def __str__(self) -> str:
        return f"{self.path} does not exist"


def resolve(path: PathLike) -> pathlib.Path:
    """Fully resolve `path` and make sure it exists.

    The returned path has the user wildcard expanded. This function raises
    `~iotools.NonExistentPathError` if the resolved path does not exist.
    """
    resolved = pathlib.Path(path).expanduser().resolve()
    if not resolved.exists():
        raise NonExistentPathError(resolved)
    return resolved


def search(
    paths: typing.Iterable[typing.Optional[PathLike]],
    file: PathLike,
) -> typing.Optional[pathlib.Path]:
    """Search `paths` for `file`.

    Parameters
    ----------
    paths : iterable of path-like
        The paths to search, in the order given. Members that are ``None`` or
        that do not exist on the current file system are skipped.

    file : path-like
        The file to locate.

    Returns
    -------
    path or `None`
        The full path to the file, if found.
    """
    for p in paths:
        if p is None:
            continue
        try:
            path = resolve(p)
        except NonExistentPathError:
            continue
        if path.is_dir():
            test = path / str(file)
            if test.exists():
                return test
