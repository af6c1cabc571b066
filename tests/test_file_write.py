"""Tests for the inline file write command."""

import base64
import gzip
import hashlib
import re
import shlex
import shutil
import subprocess

import pytest

from filecast.core.exceptions import TemplateError, ValidationError
from filecast.domain.commands import FileSpec, WriteFileCommand, write_file
from filecast.domain.commands import file_write
from filecast.domain.deploy import Package, plan, prepare

PAYLOAD_PATTERN = re.compile(r"echo (?P<payload>\S+) \| base64 -d \| gunzip > (?P<tmp>\S+)")


def _steps(cmd: str) -> list[str]:
    return cmd.split(" && ")


def _decode(cmd: str) -> bytes:
    match = PAYLOAD_PATTERN.search(cmd)
    assert match is not None, cmd
    return gzip.decompress(base64.b64decode(match.group("payload")))


class TestRoundTrip:
    """The embedded payload must decode to the original bytes."""

    @pytest.mark.parametrize(
        "content",
        [
            "hello\n",
            "x",
            "line one\nline two\n\n\ttabbed $HOME `uname` 'quoted' \"double\"\n",
            "unicode: äöü ✓ 日本語\n",
            "A" * 200_000,
        ],
    )
    def test_payload_decodes_to_content(self, content):
        cmd = write_file("/etc/app.conf", content).shell()
        assert _decode(cmd) == content.encode("utf-8")

    def test_large_payload_is_compressed(self):
        content = "repeat me\n" * 10_000
        cmd = write_file("/etc/big", content).shell()
        assert len(cmd) < len(content) / 10


class TestTempPath:
    """Temp file names are derived from the SHA-256 of the content."""

    def test_same_content_same_temp_path(self):
        first = write_file("/a", "same content").shell()
        second = write_file("/b", "same content").shell()
        assert PAYLOAD_PATTERN.search(first).group("tmp") == PAYLOAD_PATTERN.search(second).group("tmp")

    def test_different_content_different_temp_path(self):
        # Distinct only with overwhelming probability: relies on SHA-256 not colliding
        paths = {file_write.temp_path_for(f"content {i}") for i in range(500)}
        assert len(paths) == 500

    def test_digest_is_over_uncompressed_content(self):
        expected = hashlib.sha256(b"hello\n").hexdigest()
        assert file_write.temp_path_for("hello\n") == f"/tmp/filecast.{expected}"

    def test_shell_is_deterministic(self):
        cmd = write_file("/etc/motd", "hello\n", owner="app", permissions=0o600)
        assert cmd.shell() == cmd.shell()


class TestValidation:
    """Structural validation happens before any encoding work."""

    def test_empty_path_fails(self):
        with pytest.raises(ValidationError, match="no path given"):
            write_file("", "content").validate()

    def test_empty_content_fails(self):
        with pytest.raises(ValidationError, match="no content given for file '/etc/motd'"):
            write_file("/etc/motd", "").validate()

    def test_valid_command_passes(self):
        write_file("/etc/motd", "hello\n").validate()

    @pytest.mark.parametrize("path,content", [("", "content"), ("/etc/motd", "")])
    def test_invalid_command_never_reaches_encoding(self, monkeypatch, path, content):
        calls = []
        monkeypatch.setattr(file_write, "encode_content", lambda c: calls.append(("encode", c)))
        monkeypatch.setattr(file_write, "content_digest", lambda c: calls.append(("digest", c)))

        package = Package()
        package.add_commands("files", write_file("/etc/ok", "fine"), write_file(path, content))

        with pytest.raises(ValidationError):
            plan(package, {})
        assert calls == []


class TestConditionalClauses:
    """chown iff owner is set, chmod iff permissions are non-zero."""

    def test_neither_clause_by_default(self):
        cmd = write_file("/etc/motd", "hello\n").shell()
        assert "chown" not in cmd
        assert "chmod" not in cmd

    def test_owner_only(self):
        steps = _steps(write_file("/etc/motd", "hello\n", owner="app").shell())
        assert any(s.startswith("chown app /tmp/filecast.") for s in steps)
        assert not any(s.startswith("chmod") for s in steps)

    def test_permissions_only(self):
        steps = _steps(write_file("/etc/motd", "hello\n", permissions=0o640).shell())
        assert any(s.startswith("chmod 0640 /tmp/filecast.") for s in steps)
        assert not any(s.startswith("chown") for s in steps)

    def test_root_owner_still_chowns(self):
        cmd = write_file("/etc/motd", "hello\n", owner="root").shell()
        assert "chown root /tmp/filecast." in cmd

    def test_both_clauses_before_move(self):
        steps = _steps(write_file("/etc/motd", "hello\n", owner="app:app", permissions=0o600).shell())
        assert [s.split()[0] for s in steps] == ["mkdir", "echo", "chown", "chmod", "mv"]


class TestAtomicity:
    """The target path is only touched by the final mv."""

    @pytest.mark.parametrize("owner,permissions", [("", 0), ("app", 0o644), ("", 0o755)])
    def test_target_only_in_last_step(self, owner, permissions):
        target = "/srv/app/config/settings.ini"
        steps = _steps(write_file(target, "key = value\n", owner, permissions).shell())

        for step in steps[:-1]:
            assert target not in shlex.split(step)
        assert shlex.split(steps[-1])[0] == "mv"
        assert shlex.split(steps[-1])[-1] == target

    def test_modes_applied_to_temp_file(self):
        cmd = write_file("/etc/motd", "hello\n", owner="app", permissions=0o600).shell()
        tmp = file_write.temp_path_for("hello\n")
        assert f"chown app {tmp}" in cmd
        assert f"chmod 0600 {tmp}" in cmd


class TestQuoting:
    """User controlled paths are shell quoted."""

    def test_path_with_spaces_and_metacharacters(self):
        target = "/srv/my app/$(reboot);x"
        steps = _steps(write_file(target, "data").shell())
        assert shlex.split(steps[-1])[-1] == target
        assert shlex.split(steps[0]) == ["mkdir", "-p", "/srv/my app"]

    def test_owner_is_quoted(self):
        cmd = write_file("/etc/motd", "x", owner="app; rm -rf /").shell()
        assert "chown 'app; rm -rf /'" in cmd

    def test_relative_path_uses_current_directory(self):
        steps = _steps(write_file("motd", "x").shell())
        assert steps[0] == "mkdir -p ."


class TestEndToEndExample:
    """hello to /etc/motd, no owner, no mode."""

    def test_motd(self):
        cmd = write_file("/etc/motd", "hello\n").shell()
        digest = hashlib.sha256(b"hello\n").hexdigest()
        tmp = f"/tmp/filecast.{digest}"
        steps = _steps(cmd)

        assert steps[0] == "mkdir -p /etc"
        assert steps[1].endswith(f"| base64 -d | gunzip > {tmp}")
        assert steps[2] == f"mv {tmp} /etc/motd"
        assert len(steps) == 3
        assert _decode(cmd) == b"hello\n"

    @pytest.mark.skipif(
        not all(shutil.which(tool) for tool in ("sh", "base64", "gunzip")),
        reason="POSIX shell tools not available",
    )
    def test_command_runs_in_local_shell(self, tmp_path):
        target = tmp_path / "nested" / "dir" / "out.txt"
        content = "written by a shell\n"
        cmd = write_file(str(target), content, permissions=0o600).shell()

        subprocess.run(["sh", "-c", cmd], check=True)

        assert target.read_text() == content
        assert target.stat().st_mode & 0o777 == 0o600


class TestRenderAndLogging:
    """Rendering mutates fields in place; logging summarises them."""

    def test_render_expands_path_and_content(self):
        cmd = write_file("/etc/{{ name }}.conf", "host={{ host }}\n")
        prepare(cmd, {"name": "app", "host": "db1"})
        assert cmd.spec == FileSpec(path="/etc/app.conf", content="host=db1\n")

    def test_render_again_starts_from_original_text(self):
        cmd = write_file("/etc/{{ name }}", "{{ '{{' }} literal }}\n")
        cmd.render({"name": "a"})
        cmd.render({"name": "b"})
        assert cmd.spec == FileSpec(path="/etc/b", content="{{ literal }}\n")

    def test_shell_script_content_passes_through(self):
        script = 'n=${#ARGS[@]}\necho "$n"\n'
        cmd = write_file("/usr/local/bin/count", script)
        prepare(cmd, {})
        assert _decode(cmd.shell()) == script.encode()

    def test_block_tags_are_not_interpreted(self):
        cmd = write_file("/etc/x", "{% raw %}x{% endraw %}\n")
        prepare(cmd, {})
        assert cmd.spec.content == "{% raw %}x{% endraw %}\n"

    def test_render_failure_is_loud(self):
        cmd = write_file("/etc/motd", "hello {{ missing }}")
        with pytest.raises(TemplateError):
            cmd.render({})

    def test_logging_plain(self):
        assert write_file("/etc/motd", "hello\n").logging() == "[FILE   ] /etc/motd"

    def test_logging_with_owner_and_mode(self):
        line = write_file("/etc/motd", "hello\n", owner="app", permissions=0o644).logging()
        assert line == "[FILE   ][CHOWN:app][CHMOD:0644] /etc/motd"

    def test_logging_hides_root_owner(self):
        assert write_file("/etc/motd", "x", owner="root").logging() == "[FILE   ] /etc/motd"

    def test_constructed_through_spec(self):
        cmd = WriteFileCommand(FileSpec(path="/etc/motd", content="hello\n"))
        assert cmd.shell() == write_file("/etc/motd", "hello\n").shell()
