# tests/test_registry.py

import locale
from pathlib import Path

import pytest

from tml_helper.config import HelperConfig
from tml_helper.errors import TemplateNotFoundError, TemplateReadError
from tml_helper.templates.origins import Origin
from tml_helper.templates.registry import (
    TemplateRegistry,
    display_name_for,
    split_template_name,
)


@pytest.fixture
def dirs(layout):
    return {
        "workspace": layout["project"] / ".tml-helper" / "templates",
        "user": layout["storage"] / "templates",
        "bundled": layout["install"] / "templates",
    }


@pytest.mark.parametrize("filename,expected", [
    ("ModItem.cs.template", ("ModItem", ".cs")),
    ("Weapon.template", ("Weapon", "")),
    ("My.Fancy.Item.cs.template", ("My.Fancy.Item", ".cs")),
    (".cs.template", (".cs", "")),
])
def test_split_template_name(filename, expected):
    assert split_template_name(filename) == expected


def test_display_name_examples():
    assert display_name_for("ModItem.cs.template") == "ModItem"
    assert display_name_for("Weapon.template") == "Weapon"


def test_workspace_wins_over_user_and_bundled(registry, dirs, make_template):
    for origin in ("workspace", "user", "bundled"):
        make_template(dirs[origin], "ModItem.cs.template", f"// {origin}")

    catalog = registry.build_catalog()
    assert len(catalog) == 1
    assert catalog[0].origin is Origin.WORKSPACE
    assert registry.read_template(catalog[0]) == "// workspace"


def test_user_wins_over_bundled(registry, dirs, make_template):
    make_template(dirs["user"], "ModItem.cs.template", "// user")
    make_template(dirs["bundled"], "ModItem.cs.template", "// bundled")

    entry = registry.get_template("ModItem")
    assert entry.origin is Origin.USER
    assert entry.absolute_path == (dirs["user"] / "ModItem.cs.template").resolve()


def test_shadowing_uses_display_name_not_file_name(registry, dirs, make_template):
    """Weapon.cs.template in the workspace hides Weapon.template from bundled."""
    make_template(dirs["workspace"], "Weapon.cs.template")
    make_template(dirs["bundled"], "Weapon.template")

    catalog = registry.build_catalog()
    assert [(e.display_name, e.raw_identifier) for e in catalog] == [("Weapon", "Weapon.cs.template")]


def test_shadowed_entries_are_reported(registry, dirs, make_template):
    make_template(dirs["workspace"], "ModItem.cs.template")
    make_template(dirs["user"], "ModItem.cs.template")
    make_template(dirs["bundled"], "ModItem.cs.template")
    make_template(dirs["bundled"], "ModBuff.cs.template")

    hidden = registry.shadowed("ModItem")
    assert [e.origin for e in hidden] == [Origin.USER, Origin.BUNDLED]
    assert registry.shadowed("ModBuff") == []


def test_catalog_merges_distinct_names(registry, dirs, make_template):
    make_template(dirs["workspace"], "Custom.cs.template")
    make_template(dirs["user"], "Shared.cs.template")
    make_template(dirs["bundled"], "ModItem.cs.template")

    catalog = registry.build_catalog()
    assert {e.display_name: e.origin for e in catalog} == {
        "Custom": Origin.WORKSPACE,
        "Shared": Origin.USER,
        "ModItem": Origin.BUNDLED,
    }


def test_display_names_are_unique(registry, dirs, make_template):
    for origin in ("workspace", "user", "bundled"):
        for name in ("A.cs.template", "B.template", "B.cs.template", "C.txt.template"):
            make_template(dirs[origin], name)

    names = [e.display_name for e in registry.build_catalog()]
    assert len(names) == len(set(names)) == 3


def test_catalog_is_sorted(registry, dirs, make_template):
    for name in ("cherry.template", "Banana.template", "apple.template"):
        make_template(dirs["bundled"], name)

    names = [e.display_name for e in registry.build_catalog()]
    assert names == ["apple", "Banana", "cherry"]

    keys = [locale.strxfrm(n.casefold()) for n in names]
    assert keys == sorted(keys)


def test_empty_catalog_is_not_an_error(registry):
    assert registry.build_catalog() == []


def test_user_dir_is_created_by_catalog_build(registry, layout):
    registry.build_catalog()
    assert (layout["storage"] / "templates").is_dir()


def test_workspace_plain_templates_dir(registry, layout, make_template):
    make_template(layout["project"] / "templates", "Plain.cs.template")
    entry = registry.get_template("Plain")
    assert entry.origin is Origin.WORKSPACE


def test_broken_origin_does_not_block_others(registry, dirs, make_template, monkeypatch):
    make_template(dirs["workspace"], "Mine.cs.template")
    make_template(dirs["bundled"], "ModItem.cs.template")

    original_iterdir = Path.iterdir
    broken = dirs["workspace"]

    def flaky_iterdir(self):
        if self == broken:
            raise PermissionError("Permission denied")
        return original_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", flaky_iterdir)
    assert [e.display_name for e in registry.build_catalog()] == ["ModItem"]


def test_unusable_user_storage_does_not_block_others(registry, dirs, layout, make_template):
    make_template(dirs["workspace"], "Mine.cs.template")
    make_template(dirs["bundled"], "ModItem.cs.template")
    # A file where the storage directory should be
    layout["storage"].write_text("not a directory")

    catalog = registry.build_catalog()
    assert [e.display_name for e in catalog] == ["Mine", "ModItem"]
    assert [e.origin for e in catalog] == [Origin.WORKSPACE, Origin.BUNDLED]


def test_catalog_reflects_file_system_changes(registry, dirs, make_template):
    assert registry.build_catalog() == []
    make_template(dirs["user"], "Late.cs.template")
    assert [e.display_name for e in registry.build_catalog()] == ["Late"]


def test_get_template_not_found_lists_available(registry, dirs, make_template):
    make_template(dirs["bundled"], "ModItem.cs.template")
    with pytest.raises(TemplateNotFoundError) as exc_info:
        registry.get_template("Missing")
    assert exc_info.value.available == ["ModItem"]


def test_read_failure_is_a_hard_error(registry, dirs, make_template):
    path = make_template(dirs["bundled"], "Gone.cs.template")
    entry = registry.get_template("Gone")
    path.unlink()
    with pytest.raises(TemplateReadError):
        registry.read_template(entry)


def test_render_substitutes_variables(registry, dirs, make_template):
    make_template(dirs["bundled"], "ModItem.cs.template")
    entry = registry.get_template("ModItem")
    text = registry.render(entry, {"Namespace": "Foo", "ClassName": "Bar"})
    assert text == "namespace Foo { class Bar {} }"


def test_default_namespace_from_project_folder(layout):
    project = layout["project"].parent / "Cool Mod-2"
    project.mkdir()
    config = HelperConfig(install_path=layout["install"], storage_path=layout["storage"], project_root=project)
    assert TemplateRegistry(config).default_namespace() == "CoolMod2"


def test_default_namespace_without_project(layout):
    config = HelperConfig(install_path=layout["install"], storage_path=layout["storage"])
    assert TemplateRegistry(config).default_namespace() == "MyMod"


def test_default_namespace_config_override(config):
    config.namespace = "Configured"
    assert TemplateRegistry(config).default_namespace() == "Configured"
