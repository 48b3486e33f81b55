"""Tests for mediaflow.runtime.workspace."""

from pathlib import Path

import pytest

from mediaflow.runtime.errors import RelocationFailed
from mediaflow.runtime.workspace import LocalWorkspace, uri_to_path


class TestUriToPath:
    def test_file_uri(self, tmp_path):
        path = tmp_path / "a b.mp4"
        assert uri_to_path(path.as_uri()) == path

    def test_plain_path(self):
        assert uri_to_path("/data/in.mp4") == Path("/data/in.mp4")

    def test_rejects_other_schemes(self):
        with pytest.raises(ValueError):
            uri_to_path("http://example.com/a.mp4")


class TestLocalWorkspaceMove:
    """Relocation into <root>/<namespace>/<element id>/<filename>."""

    def test_moves_into_namespace(self, workspace, produced_file):
        uri = workspace.move(produced_file.as_uri(), "wi-1", "el-1", "encoded.mp4")
        target = workspace.root / "wi-1" / "el-1" / "encoded.mp4"
        assert uri == target.resolve().as_uri()
        assert target.read_bytes() == b"produced-bytes"
        assert not produced_file.exists()

    def test_keeps_source_name_without_filename(self, workspace, produced_file):
        uri = workspace.move(str(produced_file), "wi-1", "el-1")
        assert uri.endswith("/wi-1/el-1/output.bin")

    def test_missing_source(self, workspace, tmp_path):
        with pytest.raises(RelocationFailed) as exc_info:
            workspace.move((tmp_path / "missing.mp4").as_uri(), "wi-1", "el-1", "x.mp4")
        assert exc_info.value.element_id == "el-1"

    def test_unsupported_scheme(self, workspace):
        with pytest.raises(RelocationFailed):
            workspace.move("s3://bucket/key.mp4", "wi-1", "el-1", "x.mp4")

    @pytest.mark.parametrize(
        "namespace,element_id,filename",
        [("..", "el-1", "x.mp4"), ("wi-1", "a/b", "x.mp4"), ("wi-1", "el-1", "../x.mp4")],
    )
    def test_rejects_path_traversal(self, workspace, produced_file, namespace, element_id, filename):
        with pytest.raises(RelocationFailed):
            workspace.move(produced_file.as_uri(), namespace, element_id, filename)
        assert produced_file.exists()

    def test_scratch_dir_is_created(self, workspace):
        path = workspace.scratch_dir("job-1")
        assert path.is_dir()
        assert path == workspace.root / "scratch" / "job-1"


class TestLocalWorkspaceMoveErrors:
    def test_os_error_is_wrapped(self, workspace, produced_file, monkeypatch):
        def broken_move(src, dst):
            raise PermissionError("read-only file system")

        monkeypatch.setattr("mediaflow.runtime.workspace.shutil.move", broken_move)
        with pytest.raises(RelocationFailed) as exc_info:
            workspace.move(produced_file.as_uri(), "wi-1", "el-1", "x.mp4")
        assert "read-only" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, PermissionError)
