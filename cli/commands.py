"""Command handler functions for CLI operations."""

from typing import Optional

from client.config import Config
from client.dfs_client import DFSClient
from client.exceptions import DFSException, EndOfFileError, ListingIncompleteError
from cli.models import CatCommand, ListCommand, ReadCommand, StatCommand
from cli.utils import format_entry, format_file_size, format_mode, format_timestamp
from common.logging_config import get_logger

logger = get_logger(__name__)


_client: Optional[DFSClient] = None


def get_client() -> DFSClient:
    """
    Get or create the shared DFSClient instance.

    Returns:
        DFSClient instance
    """
    global _client
    if _client is None:
        logger.debug("Creating new DFSClient instance")
        _client = DFSClient.from_config(Config())
    return _client


def handle_list(cmd: ListCommand, client: Optional[DFSClient] = None) -> str:
    """
    Handle 'ls' command.

    Args:
        cmd: ListCommand with path and page size
        client: Optional DFSClient for dependency injection (testing)

    Returns:
        Listing or error message
    """
    if client is None:
        client = get_client()

    lines = []
    try:
        with client.open(cmd.path) as handle:
            if cmd.page_size > 0:
                pages = 0
                while True:
                    try:
                        page = handle.readdir(cmd.page_size)
                    except EndOfFileError:
                        break
                    pages += 1
                    lines.extend(format_entry(entry) for entry in page)
                logger.debug(f"Listed {cmd.path} in {pages} page(s)")
            else:
                lines.extend(format_entry(entry) for entry in handle.readdir(0))
    except ListingIncompleteError as e:
        lines.extend(format_entry(entry) for entry in e.entries)
        lines.append(f"Error: listing incomplete: {e.__cause__ or e}")
        return "\n".join(lines)
    except DFSException as e:
        return f"Error: {e}"

    if not lines:
        return f"{cmd.path}: empty directory"
    return "\n".join(lines + [f"{len(lines)} entries"])


def handle_stat(cmd: StatCommand, client: Optional[DFSClient] = None) -> str:
    """
    Handle 'stat' command.

    Args:
        cmd: StatCommand with path
        client: Optional DFSClient for dependency injection (testing)

    Returns:
        Attribute summary or error message
    """
    if client is None:
        client = get_client()

    try:
        info = client.stat(cmd.path)
    except DFSException as e:
        return f"Error: {e}"

    kind = "directory" if info.is_dir else "file"
    return "\n".join([
        f"Path:        {cmd.path}",
        f"Type:        {kind}",
        f"Size:        {info.size} ({format_file_size(info.size)})",
        f"Mode:        {format_mode(info.permission, info.is_dir)}",
        f"Owner:       {info.owner or '-'}:{info.group or '-'}",
        f"Replication: {info.replication}",
        f"Block size:  {format_file_size(info.block_size)}",
        f"Modified:    {format_timestamp(info.modification_time)}",
    ])


def handle_cat(cmd: CatCommand, client: Optional[DFSClient] = None) -> str:
    """
    Handle 'cat' command.

    Args:
        cmd: CatCommand with path
        client: Optional DFSClient for dependency injection (testing)

    Returns:
        File content decoded as UTF-8, or error message
    """
    if client is None:
        client = get_client()

    try:
        data = client.read_file(cmd.path)
    except DFSException as e:
        return f"Error: {e}"

    return data.decode('utf-8', errors='replace')


def handle_read(cmd: ReadCommand, client: Optional[DFSClient] = None) -> str:
    """
    Handle 'read' command: print up to cmd.length bytes from cmd.offset.

    Args:
        cmd: ReadCommand with path, offset and length
        client: Optional DFSClient for dependency injection (testing)

    Returns:
        Byte range decoded as UTF-8, or error message
    """
    if client is None:
        client = get_client()

    chunks = []
    remaining = cmd.length
    try:
        with client.open(cmd.path) as handle:
            handle.seek(cmd.offset)
            while remaining > 0:
                try:
                    chunk = handle.read(remaining)
                except EndOfFileError:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
    except DFSException as e:
        return f"Error: {e}"

    data = b"".join(chunks)
    header = f"{len(data)} bytes at offset {cmd.offset}:"
    return f"{header}\n{data.decode('utf-8', errors='replace')}"
