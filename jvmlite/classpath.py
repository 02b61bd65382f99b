"""Locating class files in directories, jar/zip archives and path lists."""

from __future__ import annotations

import os
import zipfile
from abc import ABC, abstractmethod

_ARCHIVE_SUFFIXES = (".jar", ".JAR", ".zip", ".ZIP")
_JAR_SUFFIXES = (".jar", ".JAR")


class ClassNotFoundError(LookupError):
    """Raised when a class cannot be read from a classpath entry."""


class JreNotFoundError(FileNotFoundError):
    """Raised when no JRE directory can be located."""


class Entry(ABC):
    """One element of a classpath."""

    @abstractmethod
    def read_class(self, class_name) -> tuple[bytes, Entry]:
        """Return the bytes of ``class_name`` and the entry that held them."""

    @abstractmethod
    def __str__(self) -> str:
        ...


class DirEntry(Entry):
    """A directory whose files are laid out by class name."""

    def __init__(self, path):
        self.abs_dir = os.path.abspath(path)

    def read_class(self, class_name) -> tuple[bytes, Entry]:
        file_name = os.path.join(self.abs_dir, class_name)
        try:
            with open(file_name, "rb") as f:
                return f.read(), self
        except OSError as err:
            raise ClassNotFoundError(f"class not found: {class_name}") from err

    def __str__(self) -> str:
        return self.abs_dir

    def __repr__(self) -> str:
        return f"DirEntry({self.abs_dir!r})"


def _find_member(archive: zipfile.ZipFile, class_name: str) -> zipfile.ZipInfo | None:
    return next((info for info in archive.infolist() if info.filename == class_name), None)


class ZipEntry(Entry):
    """A jar or zip archive, opened afresh for every lookup."""

    def __init__(self, path):
        self.abs_path = os.path.abspath(path)

    def read_class(self, class_name) -> tuple[bytes, Entry]:
        try:
            with zipfile.ZipFile(self.abs_path) as archive:
                info = _find_member(archive, class_name)
                if info is not None:
                    return archive.read(info), self
        except (OSError, zipfile.BadZipFile) as err:
            raise ClassNotFoundError(f"class not found: {class_name}") from err
        raise ClassNotFoundError(f"class not found: {class_name}")

    def __str__(self) -> str:
        return self.abs_path

    def __repr__(self) -> str:
        return f"ZipEntry({self.abs_path!r})"


class CachedZipEntry(Entry):
    """A jar or zip archive kept open between lookups."""

    def __init__(self, path):
        self.abs_path = os.path.abspath(path)
        self._archive: zipfile.ZipFile | None = None

    def _open(self) -> zipfile.ZipFile:
        if self._archive is None:
            self._archive = zipfile.ZipFile(self.abs_path)
        return self._archive

    def read_class(self, class_name) -> tuple[bytes, Entry]:
        try:
            archive = self._open()
            info = _find_member(archive, class_name)
            if info is not None:
                return archive.read(info), self
        except (OSError, zipfile.BadZipFile) as err:
            raise ClassNotFoundError(f"class not found: {class_name}") from err
        raise ClassNotFoundError(f"class not found: {class_name}")

    @property
    def is_open(self) -> bool:
        return self._archive is not None

    def close(self):
        """Close the underlying archive if it is open."""
        if self._archive is not None:
            self._archive.close()
            self._archive = None

    def __enter__(self) -> CachedZipEntry:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __str__(self) -> str:
        return self.abs_path

    def __repr__(self) -> str:
        return f"CachedZipEntry({self.abs_path!r})"


class CompositeEntry(Entry):
    """An ordered list of entries searched front to back."""

    def __init__(self, entries):
        self.entries: list[Entry] = list(entries)

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def read_class(self, class_name) -> tuple[bytes, Entry]:
        for entry in self.entries:
            try:
                return entry.read_class(class_name)
            except ClassNotFoundError:
                continue
        raise ClassNotFoundError(f"class not found: {class_name}")

    def __str__(self) -> str:
        return os.pathsep.join(str(entry) for entry in self.entries)

    def __repr__(self) -> str:
        return f"CompositeEntry({self.entries!r})"


def new_entry(path) -> Entry:
    """Build the entry kind that matches the form of ``path``."""
    if os.pathsep in path:
        return composite_entry(path)
    if path.endswith("*"):
        return wildcard_entry(path)
    if path.endswith(_ARCHIVE_SUFFIXES):
        return ZipEntry(path)
    return DirEntry(path)


def composite_entry(path_list) -> CompositeEntry:
    """Build one entry per element of a path-separator-delimited list."""
    return CompositeEntry(new_entry(path) for path in path_list.split(os.pathsep))


def wildcard_entry(path) -> CompositeEntry:
    """Collect the jar files directly inside the directory ``path`` names (minus '*')."""
    base_dir = path[:-1]
    try:
        with os.scandir(base_dir) as it:
            children = sorted(it, key=lambda child: child.name)
    except OSError:
        return CompositeEntry([])
    return CompositeEntry(
        ZipEntry(os.path.join(base_dir, child.name))
        for child in children
        if not child.is_dir(follow_symlinks=False) and child.name.endswith(_JAR_SUFFIXES)
    )


class Classpath:
    """Boot, extension and user class search paths."""

    def __init__(self, boot, ext, user):
        self.boot: Entry = boot
        self.ext: Entry = ext
        self.user: Entry = user

    def read_class(self, class_name) -> tuple[bytes, Entry]:
        """Read ``class_name`` (without '.class'), trying boot, ext, then user paths."""
        file_name = class_name + ".class"
        for entry in (self.boot, self.ext):
            try:
                return entry.read_class(file_name)
            except ClassNotFoundError:
                continue
        return self.user.read_class(file_name)

    def __str__(self) -> str:
        return str(self.user)


def _jre_dir(jre_option: str) -> str:
    if jre_option and os.path.exists(jre_option):
        return jre_option
    if os.path.exists("./jre"):
        return "./jre"
    java_home = os.environ.get("JAVA_HOME")
    if java_home:
        return os.path.join(java_home, "jre")
    raise JreNotFoundError("Can not find jre folder!")


def parse_classpath(jre_option, cp_option) -> Classpath:
    """Build a Classpath from the -Xjre and -classpath options."""
    jre_dir = _jre_dir(jre_option)
    boot = wildcard_entry(os.path.join(jre_dir, "lib", "*"))
    ext = wildcard_entry(os.path.join(jre_dir, "ext", "*"))
    user = new_entry(cp_option or ".")
    return Classpath(boot, ext, user)