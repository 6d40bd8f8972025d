"""Tests for the libsass adapter."""

from pathlib import Path

import pytest
import sass

from sass_theme import render_sync, from_sass
from sass_theme.values import Rgba, VBool, VColor, VList, VMap, VNull, VNumber, VOther, VString

SASS_DIR = Path(__file__).parent / "sass"


# ---------------------------------------------------------------------------
# from_sass
# ---------------------------------------------------------------------------

class TestFromSass:
    def test_scalars(self):
        assert from_sass("bold") == VString("bold")
        assert from_sass(True) == VBool(True)
        assert from_sass(None) == VNull()

    def test_number(self):
        assert from_sass(sass.SassNumber(16, "px")) == VNumber(16.0, "px")

    def test_color(self):
        assert from_sass(sass.SassColor(255, 0, 0, 0.5)) == VColor(Rgba(255, 0, 0, 0.5))

    def test_comma_list(self):
        value = sass.SassList(["Arial", "serif"], sass.SASS_SEPARATOR_COMMA)
        assert from_sass(value) == VList((VString("Arial"), VString("serif")), "comma")

    def test_space_list(self):
        value = sass.SassList([sass.SassNumber(0, ""), "auto"], sass.SASS_SEPARATOR_SPACE)
        node = from_sass(value)
        assert node.separator == "space"
        assert node.value == (VNumber(0.0), VString("auto"))

    def test_map(self):
        value = sass.SassMap([("small", sass.SassNumber(576, "px"))])
        assert from_sass(value) == VMap({"small": VNumber(576.0, "px")})

    def test_map_with_number_key(self):
        value = sass.SassMap([(sass.SassNumber(1, ""), "one")])
        assert from_sass(value) == VMap({"1": VString("one")})

    def test_unknown(self):
        marker = object()
        assert from_sass(marker) == VOther(marker)


# ---------------------------------------------------------------------------
# render_sync
# ---------------------------------------------------------------------------

class TestRenderSync:
    def test_global_variables(self):
        result = render_sync({"file": str(SASS_DIR / "test-basic.scss")})
        variables = result.vars["global"]
        assert list(variables)[:3] == ["$primary-color", "$overlay", "$base-font-size"]
        assert variables["$base-font-size"] == VNumber(16.0, "px")
        assert variables["$rounded"] == VBool(True)
        assert variables["$nothing"] == VNull()
        assert "$local-only" not in variables

    def test_css_still_compiled(self):
        result = render_sync({"file": str(SASS_DIR / "test-basic.scss")})
        assert ".button" in result.css
        assert "sass_theme_extract" not in result.css

    def test_included_files(self):
        result = render_sync({"file": str(SASS_DIR / "test-import.scss")})
        assert len(result.included_files) == 2
        assert list(result.vars["global"]) == ["$brand", "$brand-light", "$spacing"]

    def test_no_globals(self):
        result = render_sync({"file": str(SASS_DIR / "test-empty.scss")})
        assert result.vars == {}

    def test_include_paths_forwarded(self):
        result = render_sync({
            "file": str(SASS_DIR / "test-opts-sass.scss"),
            "include_paths": [str(SASS_DIR / "nested")],
        })
        assert result.vars["global"]["$gutter"] == VNumber(24.0, "px")

    def test_single_include_path_string(self):
        result = render_sync({
            "file": str(SASS_DIR / "test-opts-sass.scss"),
            "include_paths": str(SASS_DIR / "nested"),
        })
        assert "$gutter" in result.vars["global"]

    def test_source_options_ignored(self):
        result = render_sync({
            "file": str(SASS_DIR / "test-empty.scss"),
            "filename": str(SASS_DIR / "test-basic.scss"),
        })
        assert result.vars == {}

    def test_custom_functions_kept(self, tmp_path):
        src = tmp_path / "fn.scss"
        src.write_text("$gap: double(4px);\n")
        result = render_sync({
            "file": str(src),
            "custom_functions": {
                "double": lambda n: sass.SassNumber(n.value * 2, n.unit),
            },
        })
        assert result.vars["global"]["$gap"] == VNumber(8.0, "px")

    def test_global_flag(self, tmp_path):
        src = tmp_path / "flag.scss"
        src.write_text("$a: 1px;\n.x { $b: 2px !global; width: $b; }\n")
        result = render_sync({"file": str(src)})
        assert list(result.vars["global"]) == ["$a", "$b"]

    def test_indented_syntax(self):
        result = render_sync({"file": str(SASS_DIR / "test-indented.sass")})
        assert result.vars["global"]["$gap"] == VNumber(2.0, "rem")

    def test_compile_error_propagates(self):
        with pytest.raises(sass.CompileError):
            render_sync({"file": str(SASS_DIR / "test-error.scss")})

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            render_sync({"file": str(SASS_DIR / "does-not-exist.scss")})

    def test_list_separators(self):
        result = render_sync({"file": str(SASS_DIR / "test-basic.scss")})
        variables = result.vars["global"]
        assert variables["$margin"].separator == "space"
        assert variables["$font-stack"].separator == "comma"

    def test_hyphen_underscore_reported_once(self, tmp_path):
        src = tmp_path / "same.scss"
        src.write_text("$gap-size: 1px;\n$gap_size: 2px;\n")
        result = render_sync({"file": str(src)})
        assert result.vars["global"] == {"$gap-size": VNumber(2.0, "px")}

