"""Tests for FileHandle seek/read behaviour across block boundaries."""

import os

import pytest

from client.block_stream import ReaderState
from client.exceptions import (
    BlockReadError,
    EndOfFileError,
    InvalidArgumentError,
    MetadataInconsistencyError,
    PathNotFoundError,
    PermissionDeniedError,
)
from client.dfs_client import DFSClient
from tests.fakes import InMemoryBlockOpener, make_content

CONTENT = make_content(150)
PATH = '/data/two_blocks.bin'


class TestOpen:
    """Opening a handle fetches attributes only."""

    def test_open_fetches_only_file_info(self, dfs, fs, opener):
        handle = dfs.open(PATH)

        assert handle.name == PATH
        assert handle.size == 150
        assert not handle.is_dir
        assert handle.tell() == 0
        assert handle.state is ReaderState.UNRESOLVED
        assert fs.calls == ['getFileInfo']
        assert opener.opened == []

    def test_open_missing_path(self, dfs):
        with pytest.raises(PathNotFoundError):
            dfs.open('/data/missing.bin')

    def test_open_denied_path(self, dfs, fs):
        fs.denied.add(PATH)

        with pytest.raises(PermissionDeniedError):
            dfs.open(PATH)


class TestSeek:
    """Seek validation and whence handling."""

    def test_seek_whence_modes(self, dfs):
        handle = dfs.open(PATH)

        assert handle.seek(40) == 40
        assert handle.seek(10, os.SEEK_CUR) == 50
        assert handle.seek(-20, os.SEEK_CUR) == 30
        assert handle.seek(-50, os.SEEK_END) == 100
        assert handle.seek(0, os.SEEK_END) == 150

    @pytest.mark.parametrize("offset", [-1, 151])
    def test_seek_outside_file_rejected(self, dfs, offset):
        handle = dfs.open(PATH)
        handle.seek(42)

        with pytest.raises(InvalidArgumentError):
            handle.seek(offset)

        assert handle.tell() == 42

    def test_seek_unknown_whence_rejected(self, dfs):
        handle = dfs.open(PATH)
        handle.seek(7)

        with pytest.raises(InvalidArgumentError):
            handle.seek(0, 3)

        assert handle.tell() == 7

    def test_seek_performs_no_io(self, dfs, fs, opener):
        handle = dfs.open(PATH)
        handle.read(10)
        calls_before = list(fs.calls)
        opened_before = list(opener.opened)

        handle.seek(120)
        handle.seek(-5, os.SEEK_CUR)

        assert fs.calls == calls_before
        assert opener.opened == opened_before


class TestRead:
    """Reads through the block stream multiplexer."""

    def test_seek_then_read_every_offset(self, dfs):
        handle = dfs.open(PATH)

        for offset in range(0, 150):
            handle.seek(offset)
            data = handle.read(64)

            assert len(data) > 0
            assert data == CONTENT[offset:offset + len(data)]
            assert handle.tell() == offset + len(data)

        handle.seek(150)
        with pytest.raises(EndOfFileError):
            handle.read(64)

    def test_block_boundary_crossing(self, dfs, opener):
        handle = dfs.open(PATH)
        handle.seek(90)

        first = handle.read(80)
        second = handle.read(80)

        assert first == CONTENT[90:100]
        assert second == CONTENT[100:150]
        with pytest.raises(EndOfFileError):
            handle.read(80)
        assert [offset for _, offset in opener.opened] == [90, 0]

    def test_exact_end_of_file_touches_nothing(self, dfs, fs, opener):
        handle = dfs.open(PATH)
        handle.seek(150)

        with pytest.raises(EndOfFileError):
            handle.read(10)

        assert fs.count('getBlockLocations') == 0
        assert opener.opened == []

    def test_seek_discards_staged_data(self, fs, metadata_client):
        opener = InMemoryBlockOpener(fs, piece_size=8)
        handle = DFSClient(metadata_client, opener).open(PATH)
        handle.read(8)
        handle.read(8)

        handle.seek(3)
        data = handle.read(8)

        assert data == CONTENT[3:11]
        assert opener.streams[0].closed
        assert len(opener.opened) == 2

    def test_partial_reads_stay_on_same_stream(self, fs, metadata_client):
        opener = InMemoryBlockOpener(fs, piece_size=30)
        handle = DFSClient(metadata_client, opener).open(PATH)

        chunks = []
        while True:
            try:
                chunks.append(handle.read(1000))
            except EndOfFileError:
                break

        assert b"".join(chunks) == CONTENT
        assert [len(c) for c in chunks] == [30, 30, 30, 10, 30, 20]
        assert len(opener.opened) == 2

    def test_block_layout_fetched_once(self, dfs, fs):
        handle = dfs.open(PATH)
        handle.read(50)
        handle.seek(120)
        handle.read(50)
        handle.seek(0)
        handle.read(50)

        assert fs.count('getBlockLocations') == 1

    def test_missing_block_coverage(self, dfs, fs):
        fs.layout_overrides[PATH] = fs.blocks[PATH][:1]
        handle = dfs.open(PATH)
        handle.seek(120)

        with pytest.raises(MetadataInconsistencyError, match="no block covers offset 120"):
            handle.read(10)

        assert handle.tell() == 120

    def test_stream_error_discards_stream(self, dfs, opener, fs):
        opener.failing_blocks.add(fs.blocks[PATH][1].block_id)
        handle = dfs.open(PATH)
        handle.seek(110)

        with pytest.raises(BlockReadError):
            handle.read(10)

        assert handle.tell() == 110
        assert opener.streams[-1].closed
        assert handle.state is ReaderState.RESOLVED

        opener.failing_blocks.clear()
        assert handle.read(10) == CONTENT[110:120]
        assert len(opener.opened) == 2

    def test_open_error_propagates(self, dfs, fs, opener):
        block_id = fs.blocks[PATH][0].block_id
        opener.unreachable_blocks.add(block_id)
        handle = dfs.open(PATH)

        with pytest.raises(BlockReadError, match=f"cannot reach any datanode for block {block_id}"):
            handle.read(10)

        assert handle.tell() == 0
        assert handle.state is ReaderState.RESOLVED
        assert opener.streams == []

    def test_last_block_longer_than_file(self, dfs, fs, opener):
        oversized = fs.blocks[PATH][0].model_copy(update={'block_id': 'blk_big', 'num_bytes': 200})
        fs.layout_overrides[PATH] = [oversized]
        fs.block_data['blk_big'] = CONTENT + b"\xff" * 50
        handle = dfs.open(PATH)

        data = handle.read(1000)

        assert data == CONTENT
        assert handle.tell() == 150
        assert handle.state is ReaderState.AT_END
        assert opener.streams[0].closed
        assert handle.seek(0, os.SEEK_CUR) == 150
        with pytest.raises(EndOfFileError):
            handle.read(1000)

    def test_streams_ending_early_terminate(self, dfs, fs, opener):
        for block_id in list(fs.block_data):
            fs.block_data[block_id] = b""
        handle = dfs.open(PATH)

        with pytest.raises(BlockReadError, match="no data at offset 0"):
            handle.read(10)

        assert handle.tell() == 0
        assert all(stream.closed for stream in opener.streams)

    def test_read_at(self, dfs):
        handle = dfs.open(PATH)
        buffer = bytearray(20)

        n = handle.read_at(buffer, 95)

        assert bytes(buffer[:n]) == CONTENT[95:100]
        assert handle.tell() == 100

    def test_readinto_memoryview(self, dfs):
        handle = dfs.open('/data/small.txt')
        buffer = bytearray(64)

        n = handle.readinto(memoryview(buffer)[4:])

        assert bytes(buffer[4:4 + n]) == b'hello, block world\n'

    def test_state_transitions(self, dfs):
        handle = dfs.open(PATH)
        assert handle.state is ReaderState.UNRESOLVED

        handle.read(10)
        assert handle.state is ReaderState.STREAM_OPEN

        handle.seek(20)
        assert handle.state is ReaderState.RESOLVED

        handle.seek(100)
        handle.read(100)
        assert handle.state is ReaderState.AT_END

        handle.seek(0)
        assert handle.state is ReaderState.RESOLVED


class TestNoOps:
    """Operations that have no effect on a read-only handle."""

    def test_chmod_chown_succeed(self, dfs, fs):
        handle = dfs.open(PATH)

        assert handle.chmod(0o600) is None
        assert handle.chown(1000, 1000) is None
        assert fs.calls == ['getFileInfo']

    def test_close_releases_stream(self, dfs, opener):
        with dfs.open(PATH) as handle:
            handle.read(10)

        assert handle.closed
        assert opener.streams[0].closed

    def test_readdir_on_file_makes_no_call(self, dfs, fs):
        handle = dfs.open(PATH)

        with pytest.raises(InvalidArgumentError):
            handle.readdir(10)
        with pytest.raises(InvalidArgumentError):
            handle.readdirnames(0)

        assert fs.calls == ['getFileInfo']
