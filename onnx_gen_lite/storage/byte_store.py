"""
File-backed byte store for serialized models.

Models are usually too large to upload in one request, so the store keeps
named files that can be appended to chunk by chunk, measured, cleared and
finally read back in full when the model is set up.
"""

import os


class ByteStore:
    """Named-file byte store rooted at a directory.

    Attributes:
        root_dir: Directory holding the stored files.
    """

    def __init__(self, root_dir: str = ".") -> None:
        self.root_dir = root_dir

    def path(self, name: str) -> str:
        """Resolve ``name`` to a path inside the store."""
        if not name or os.path.basename(name) != name:
            raise ValueError(f"Invalid file name: {name!r}")
        return os.path.join(self.root_dir, name)

    def read(self, name: str) -> bytes:
        """Read the whole file.

        Raises:
            FileNotFoundError: If ``name`` has not been written.
        """
        with open(self.path(name), "rb") as f:
            return f.read()

    def append(self, name: str, data: bytes) -> None:
        """Append ``data`` to ``name``, creating the file if needed."""
        os.makedirs(self.root_dir, exist_ok=True)
        with open(self.path(name), "ab") as f:
            f.write(data)

    def clear(self, name: str) -> None:
        """Remove ``name``. Missing files are ignored."""
        try:
            os.remove(self.path(name))
        except FileNotFoundError:
            pass

    def length(self, name: str) -> int:
        """Size of ``name`` in bytes, 0 if it does not exist."""
        try:
            return os.path.getsize(self.path(name))
        except FileNotFoundError:
            return 0
