import importlib
import pathlib
import re

import pytest

DOCS_DIR = pathlib.Path(__file__).resolve().parent.parent / "docs"


def _automodules() -> list[str]:
    text = (DOCS_DIR / "index.rst").read_text(encoding="utf-8")
    return re.findall(r"^\.\. automodule:: (\S+)$", text, flags=re.MULTILINE)


def test_index_documents_package():
    assert "mdns_plugin" in _automodules()


@pytest.mark.parametrize("module_name", _automodules())
def test_documented_module_imports(module_name):
    importlib.import_module(module_name)


def test_conf_references_no_missing_directories():
    conf = (DOCS_DIR / "conf.py").read_text(encoding="utf-8")

    assert "html_static_path" not in conf
    assert "templates_path" not in conf
