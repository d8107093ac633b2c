import logging
import os
from typing import Iterable, Iterator


def is_hidden(name: str) -> bool:
    return name.startswith(".")

# Recursively yield files under root_dir, sorted by name, without following symlinks
def walk_directory(root_dir: str, *, show_hidden: bool = False) -> Iterator[str]:
    def on_error(error: OSError) -> None:
        logging.debug(f"Cannot list {error.filename}: {error}")

    for dir_path, dir_names, file_names in os.walk(root_dir, onerror=on_error, followlinks=False):
        # Pruning in place stops os.walk from descending into hidden folders
        dir_names[:] = sorted(d for d in dir_names if show_hidden or not is_hidden(d))

        for file_name in sorted(file_names):
            if not show_hidden and is_hidden(file_name):
                continue

            file_path = os.path.join(dir_path, file_name)
            if os.path.islink(file_path) or not os.path.isfile(file_path):
                continue

            yield file_path

def iter_files(paths: Iterable[str], *, show_hidden: bool = False) -> Iterator[str]:
    """
    Lazily turn the user's path arguments into the files to search.

    Files are yielded as given (even hidden ones, since the user named them),
    directories are walked recursively, anything else is reported and skipped.
    """
    for path in paths:
        if os.path.isdir(path) and not os.path.islink(path):
            yield from walk_directory(path, show_hidden=show_hidden)
        elif os.path.islink(path) and os.path.isdir(path):
            logging.debug(f"{path}: symbolic link skipped")
        elif os.path.isfile(path):
            yield path
        else:
            logging.warning(f"{path}: No such file or directory")
