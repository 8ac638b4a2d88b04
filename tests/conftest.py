# tests/conftest.py
import pytest
from click.testing import CliRunner

from tml_helper.config import HelperConfig
from tml_helper.templates.registry import TemplateRegistry


@pytest.fixture
def cli_runner():
    """Provide a reusable CLI test runner for tml-helper."""
    return CliRunner()


@pytest.fixture
def layout(tmp_path):
    """
    Empty install / storage / project directories.
    The bundled templates dir exists but holds nothing.
    """
    install = tmp_path / "install"
    storage = tmp_path / "storage"
    project = tmp_path / "MyProject"
    (install / "templates").mkdir(parents=True)
    project.mkdir()
    return {"install": install, "storage": storage, "project": project}


@pytest.fixture
def config(layout):
    return HelperConfig(
        install_path=layout["install"],
        storage_path=layout["storage"],
        project_root=layout["project"],
    )


@pytest.fixture
def registry(config):
    return TemplateRegistry(config)


@pytest.fixture
def isolated_env(layout, monkeypatch):
    """Point the env-driven storage/install lookup at the test layout."""
    monkeypatch.setenv("TML_HELPER_STORAGE_DIR", str(layout["storage"]))
    monkeypatch.setenv("TML_HELPER_INSTALL_DIR", str(layout["install"]))
    monkeypatch.chdir(layout["project"])
    return layout


def write_template(directory, filename, text="namespace ${Namespace} { class ${ClassName} {} }"):
    """Create a template file, making the directory if needed."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def make_template():
    return write_template
