from __future__ import annotations

import time

import pytest

from local_rag.extract import TypeScriptJavaScriptExtractor, extract

SOURCE = """import { readFile } from "fs";
import React from 'react';
import "./styles.css";
const path = require("path");
export { helper as assist, other } from "./helpers";

// Loads the widget configuration
export interface WidgetOptions {
  name: string;
}

export enum Mode { Fast, Slow }

export type WidgetId = string;

export const DEFAULT_NAME = "widget";

export class Widget {
  render(): string {
    return DEFAULT_NAME;
  }
}

export default function buildWidget(options: WidgetOptions) {
  return new Widget();
}
"""


def test_typescript_symbols_cover_declarations_and_methods() -> None:
    metadata = extract(SOURCE, "typescript", "src/widget.tsx")

    assert set(metadata.symbols) == {
        "buildWidget",
        "Widget",
        "WidgetOptions",
        "Mode",
        "WidgetId",
        "path",
        "DEFAULT_NAME",
        "render",
    }
    assert metadata.failed_fields == ()


def test_typescript_imports_include_require_and_reexport_sources() -> None:
    metadata = extract(SOURCE, "typescript", "src/widget.tsx")

    assert metadata.imports == ("fs", "react", "./styles.css", "path", "./helpers")


def test_typescript_exports_mark_default_and_follow_aliases() -> None:
    metadata = extract(SOURCE, "typescript", "src/widget.tsx")

    assert metadata.exports == (
        "WidgetOptions",
        "Mode",
        "WidgetId",
        "DEFAULT_NAME",
        "Widget",
        "assist",
        "other",
        "default: buildWidget",
    )


def test_typescript_comments_and_react_file_type() -> None:
    metadata = extract(SOURCE, "typescript", "src/widget.tsx")

    assert metadata.comments == ("Loads the widget configuration",)
    assert metadata.file_type == "typescript-react"


def test_commonjs_exports_and_dynamic_imports() -> None:
    extractor = TypeScriptJavaScriptExtractor()
    source = "\n".join(
        [
            "const loader = () => import('./lazy');",
            "module.exports.start = function () {};",
            "exports.stop = () => {};",
        ]
    )

    assert extractor.imports(source) == ["./lazy"]
    assert extractor.exports(source) == ["start", "stop"]


def test_default_export_of_identifier_is_prefixed() -> None:
    extractor = TypeScriptJavaScriptExtractor()

    assert extractor.exports("export default App;\n") == ["default: App"]
    assert extractor.exports("export { App as default };\n") == ["default: App"]


@pytest.mark.parametrize(
    ("content", "language"),
    [
        ("import" + " " * 20000 + "x", "typescript"),
        ("export" + "\n" * 20000 + "x", "javascript"),
        ("export default" + " " * 20000 + "(", "typescript"),
        ("function" + " " * 20000 + "x" + " " * 20000 + ";", "javascript"),
        ("/*" * 20000, "typescript"),
        ("\n" * 20000 + "x", "python"),
        ("from" + " " * 20000 + "x", "python"),
        ("use" + " " * 20000 + "x", "rust"),
        ("void run() throws" + " " * 20000 + ";", "java"),
    ],
)
def test_long_whitespace_runs_extract_in_linear_time(content: str, language: str) -> None:
    started = time.perf_counter()
    metadata = extract(content, language)
    elapsed = time.perf_counter() - started

    assert elapsed < 2.0
    assert metadata.imports == ()
    assert metadata.failed_fields == ()


def test_multiline_import_clause_is_still_recognized() -> None:
    extractor = TypeScriptJavaScriptExtractor()
    source = 'import {\n  first,\n  second,\n} from "./pair";\nexport * from "./all";\n'

    assert extractor.imports(source) == ["./pair", "./all"]
