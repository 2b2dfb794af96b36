"""Download GitHub repository archives and unpack them to a staging area."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path, PurePosixPath

import requests

from snipsync.errors import ArchiveFetchFailure, ArchiveUnpackFailure
from snipsync.paths import api_url, github_token
from snipsync.snippet.model import FilePath

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0
CHUNK_SIZE = 64 * 1024
USER_AGENT = "snipsync"


def archive_url(owner: str, repo: str, ref: str | None = None) -> str:
    url = f"{api_url()}/repos/{owner}/{repo}/zipball"
    return f"{url}/{ref}" if ref else url


def fetch_archive(
    owner: str,
    repo: str,
    ref: str | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    session: requests.Session | None = None,
) -> bytes:
    """Download a repository as a zipball.

    Raises:
        ArchiveFetchFailure: On HTTP errors (e.g. not found), network errors
            or a download that ends early.
    """
    url = archive_url(owner, repo, ref)
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": USER_AGENT,
    }
    token = github_token()
    if token:
        headers["Authorization"] = f"Bearer {token}"

    session = session or requests.Session()
    logger.debug("Downloading %s", url)
    try:
        response = session.get(url, headers=headers, timeout=timeout, stream=True)
        try:
            response.raise_for_status()
            return b"".join(response.iter_content(chunk_size=CHUNK_SIZE))
        finally:
            response.close()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        reason = e.response.reason if e.response is not None else ""
        raise ArchiveFetchFailure(
            f"Failed to download {owner}/{repo} (ref {ref or 'default'}): HTTP {status} {reason}"
        ) from e
    except requests.RequestException as e:
        raise ArchiveFetchFailure(f"Failed to download {owner}/{repo}: {e}") from e


def unpack_archive(archive_path: Path | str, output_dir: Path | str) -> list[FilePath]:
    """Extract a zip archive and delete it.

    Returns:
        One FilePath per contained file, with directories relative to
        ``output_dir`` (so the first segment is the archive's root folder).

    Raises:
        ArchiveUnpackFailure: If the archive is unreadable or has unsafe paths.
    """
    archive = Path(archive_path)
    out = Path(output_dir)
    try:
        with zipfile.ZipFile(archive) as zf:
            members = [m for m in zf.infolist() if not m.is_dir()]
            for member in members:
                name = PurePosixPath(member.filename)
                if name.is_absolute() or ".." in name.parts:
                    raise ArchiveUnpackFailure(f"Unsafe path in {archive.name}: {member.filename}")
            zf.extractall(out)
    except (zipfile.BadZipFile, OSError) as e:
        raise ArchiveUnpackFailure(f"Could not unpack {archive.name}: {e}") from e
    finally:
        archive.unlink(missing_ok=True)

    files = []
    for member in members:
        name = PurePosixPath(member.filename)
        files.append(FilePath(directory=name.parent.as_posix(), name=name.name))
    return files
