from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]


def _load_checker():
    spec = importlib.util.spec_from_file_location("check_boundaries", BACKEND_DIR / "scripts" / "check_boundaries.py")
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


check_boundaries = _load_checker()


def test_package_respects_layer_boundaries(capsys) -> None:
    assert check_boundaries.main(["--root", str(BACKEND_DIR)]) == 0
    assert "No boundary violations" in capsys.readouterr().out


def test_detects_forbidden_imports(tmp_path: Path) -> None:
    pkg = tmp_path / "lark_notify"
    (pkg / "domain").mkdir(parents=True)
    (pkg / "tasks").mkdir()
    (pkg / "domain" / "bad.py").write_text(
        "import httpx\nfrom lark_notify.application.container import build_task\n",
        encoding="utf-8",
    )
    (pkg / "tasks" / "bad.py").write_text(
        "from typing import Protocol\n"
        "from lark_notify.infrastructure.clients.lark_webhook import LarkWebhookClient\n"
        "class Sender(Protocol):\n    pass\n",
        encoding="utf-8",
    )

    violations = check_boundaries.find_violations(pkg, package="lark_notify")

    assert any("domain imports banned external module: httpx" in v for v in violations)
    assert any("domain must not depend on application" in v for v in violations)
    assert any("tasks must not depend on infrastructure" in v for v in violations)
    assert any("forbidden import 'typing.Protocol'" in v for v in violations)
    assert any("class 'Sender' must not inherit from 'Protocol'" in v for v in violations)
    assert check_boundaries.main(["--root", str(tmp_path)]) == 1
