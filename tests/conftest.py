from __future__ import annotations

from typing import Dict, Optional

import pytest  # type: ignore[import]

LOG_OUTPUT = (
    "\x1eabc123def4567890abc123def4567890abc12345|Jane Doe|Mon Oct 14 12:34:56 2024 +0200|Add parser\n"
    " src/app.py   | 12 ++++++++----\n"
    " src/utils.py |  3 +++\n"
    " 2 files changed, 11 insertions(+), 4 deletions(-)\n"
    "\n"
    "\x1edef4567890abc123def4567890abc123def45678|John Smith|not-a-date|Initial commit\n"
    " README.md | 1 +\n"
    " 1 file changed, 1 insertion(+)\n"
)

NAME_STATUS_OUTPUT = "M\tsrc/app.py\nA\tsrc/utils.py\n"

NUMSTAT_OUTPUT = "8\t4\tsrc/app.py\n3\t0\tsrc/utils.py\n"

STATUS_OUTPUT = " M src/app.py\n?? src/new_module.js\n"


class DummyRepository:
    """Returns canned git output instead of running git."""

    def __init__(self, files: Optional[Dict[str, Optional[str]]] = None) -> None:
        self.repo_path = "/tmp/dummy"
        self.files = files or {}
        self.calls: list[tuple[str, tuple]] = []

    def _record(self, name: str, *args) -> None:  # type: ignore[no-untyped-def]
        self.calls.append((name, args))

    def log_text(self, limit: int = 10) -> str:
        self._record("log_text", limit)
        return LOG_OUTPUT

    def commit_text(self, commit: str) -> str:
        self._record("commit_text", commit)
        return LOG_OUTPUT.split("\n\n")[0]

    def name_status_text(self, commit: str) -> str:
        self._record("name_status_text", commit)
        return NAME_STATUS_OUTPUT

    def commit_numstat_text(self, commit: str) -> str:
        self._record("commit_numstat_text", commit)
        return NUMSTAT_OUTPUT

    def status_text(self) -> str:
        return STATUS_OUTPUT

    def diff_text(self, path: str, commit: Optional[str] = None) -> str:
        self._record("diff_text", path, commit)
        return "diff --git a/src/app.py b/src/app.py\n--- a/src/app.py\n+++ b/src/app.py\n@@ -1,2 +1,2 @@\n-old\n+new\n same\n"

    def blame_text(self, path: str) -> str:
        return (
            "hash 1111111111111111111111111111111111111111\n"
            "author Jane Doe\n"
            "author-time 1700000000\n"
            "\tprint('hello')\n"
        )

    def commit_count_text(self) -> str:
        return "42\n"

    def shortlog_text(self) -> str:
        return "    30\tJane Doe\n    12\tJohn Smith\n"

    def author_numstat_text(self, author: str) -> str:
        return {"Jane Doe": "10\t2\tsrc/app.py\n", "John Smith": "1\t1\tREADME.md\n"}.get(author, "")

    def numstat_text(self) -> str:
        return "10\t2\tsrc/app.py\n1\t1\tREADME.md\n5\t5\tsrc/app.py\n"

    def current_branch(self) -> str:
        return "main"

    def read_file(self, path: str) -> Optional[str]:
        return self.files.get(path)


@pytest.fixture()
def dummy_repository() -> DummyRepository:
    return DummyRepository(
        files={
            "src/app.py": "def run():\n    if ready:\n        return 1\n",
            "src/new_module.js": "console.log(value);\nel.innerHTML = html;\n",
        }
    )
