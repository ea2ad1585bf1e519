"""First-run download of the Path of Building scripts."""

from __future__ import annotations

import enum
import logging
import os
import shutil
import tarfile
from pathlib import Path, PurePosixPath
from typing import BinaryIO

import requests

_log = logging.getLogger(__name__)

_MANIFEST_REPOSITORY = "meehl/rusty-pob-manifest"
_ARCHIVE_URL = "https://github.com/{repo}/archive/refs/heads/master.tar.gz"
_RAW_URL = "https://raw.githubusercontent.com/{repo}/master/{game}/{name}"
_TOP_LEVEL_FILES = frozenset({"manifest.xml", "help.txt", "changelog.txt", "LICENSE.md"})
_TIMEOUT = 60
_CHUNK_SIZE = 64 * 1024


class Game(enum.Enum):
    """The game whose build planner is installed."""

    POE1 = "poe1"
    POE2 = "poe2"

    @property
    def repository(self) -> str:
        return _GAME_REPOSITORIES[self]


_GAME_REPOSITORIES = {
    Game.POE1: "PathOfBuildingCommunity/PathOfBuilding",
    Game.POE2: "PathOfBuildingCommunity/PathOfBuilding-PoE2",
}


def archive_target_path(member_path: str, target_dir) -> Path | None:
    """Where an archive member goes under ``target_dir``, or None to skip it.

    Top-level documents and the manifest go straight into ``target_dir``; the
    contents of ``src/`` and ``runtime/lua/`` go below it with the first two
    path parts removed (so ``runtime/lua`` lands in ``lua``).
    """
    parts = PurePosixPath(member_path).parts
    if ".." in parts:
        return None
    target_dir = Path(target_dir)
    if len(parts) <= 1:
        return None
    if len(parts) == 2:
        return target_dir / parts[1] if parts[1] in _TOP_LEVEL_FILES else None
    if parts[1] == "src" or (parts[1] == "runtime" and parts[2] == "lua"):
        return target_dir.joinpath(*parts[2:])
    return None


def extract_archive(fileobj: BinaryIO, target_dir) -> list[Path]:
    """Extract the wanted members of a gzip-compressed tar stream; return their paths."""
    written: list[Path] = []
    with tarfile.open(fileobj=fileobj, mode="r|gz") as archive:
        for member in archive:
            target = archive_target_path(member.name, target_dir)
            if target is None:
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if member.isdir():
                target.mkdir(parents=True, exist_ok=True)
            elif member.isfile():
                source = archive.extractfile(member)
                if source is None:
                    continue
                with source, open(target, "wb") as out:
                    shutil.copyfileobj(source, out)
                os.chmod(target, member.mode & 0o777)
            elif member.issym():
                if target.is_symlink() or target.is_file():
                    target.unlink()
                os.symlink(member.linkname, target)
            else:
                continue
            written.append(target)
    return written


def download_file(url: str, file_path) -> None:
    """Save the body of ``url`` to ``file_path``; RuntimeError if the request fails."""
    response = requests.get(url, stream=True, timeout=_TIMEOUT)
    try:
        if not response.ok:
            raise RuntimeError(f"Unable to download: {url}")
        with open(file_path, "wb") as out:
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                out.write(chunk)
    finally:
        response.close()


def download_path_of_building(target_dir, game: Game) -> list[Path]:
    """Download the latest scripts for ``game`` and unpack them into ``target_dir``."""
    print("Downloading latest release of Path of Building...")
    url = _ARCHIVE_URL.format(repo=game.repository)
    response = requests.get(url, stream=True, timeout=_TIMEOUT)
    try:
        if not response.ok:
            raise RuntimeError(f"Unable to download: {url}")
        return extract_archive(response.raw, target_dir)
    finally:
        response.close()


def replace_manifest(target_dir, game: Game) -> None:
    """Overwrite the manifest and update check with versions that work with this runtime."""
    _log.info("Replacing manifest...")
    target_dir = Path(target_dir)
    for name in ("manifest.xml", "UpdateCheck.lua"):
        url = _RAW_URL.format(repo=_MANIFEST_REPOSITORY, game=game.value, name=name)
        download_file(url, target_dir / name)


def run_installer(script_dir, game: Game) -> bool:
    """Install the scripts unless ``Launch.lua`` is already present; True if installed."""
    script_dir = Path(script_dir)
    if (script_dir / "Launch.lua").exists():
        return False
    download_path_of_building(script_dir, game)
    replace_manifest(script_dir, game)
    return True