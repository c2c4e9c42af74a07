import pytest

VALID_LINE = '127.0.0.1 - - [01/Jan/2024:12:00:00 +0000] "GET /api HTTP/1.1" 200 1234'


@pytest.fixture
def valid_line():
    return VALID_LINE


@pytest.fixture
def write_log(tmp_path):
    """Write lines to a log file under tmp_path and return its path as str."""

    def _write(lines, name="access.log"):
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every CLF_* variable so config tests start from defaults."""
    for name in ("CLF_OUTPUT", "CLF_ON_ERROR", "CLF_LOG_LEVEL", "CLF_ENCODING", "CLF_SKIP_BLANK"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
