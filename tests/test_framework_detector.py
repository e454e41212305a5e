"""Tests for framework_detector -- additive framework evidence over the file set."""

import time

from codebase_profiler.domain.entities import FrameworkCategory
from codebase_profiler.services.framework_detector import (
    BACKEND_RULES,
    detect_angular,
    detect_frameworks,
    detect_react,
    detect_svelte,
    detect_vue,
)


def _names(frameworks):
    return [fw.name for fw in frameworks]


# ---------------------------------------------------------------------------
# React / Next.js
# ---------------------------------------------------------------------------


TSX_APP = (
    "import React from 'react';\n"
    "\n"
    "export default function App() {\n"
    '  return <div className="app">Hello</div>;\n'
    "}\n"
)


def test_react_from_tsx_component(make_view):
    found = detect_react(make_view(("src/index.tsx", TSX_APP)))
    react = found[0]
    assert react.name == "React"
    assert react.confidence > 60
    assert react.language == "typescript"
    assert react.category is FrameworkCategory.FRONTEND
    assert "react" in react.dependencies


def test_react_from_manifest_alone(make_view):
    manifest = '{"dependencies": {"react": "^18.2.0", "react-dom": "^18.2.0"}}'
    found = detect_react(make_view(("package.json", manifest)))
    assert _names(found) == ["React"]
    assert found[0].language == "javascript"
    assert found[0].dependencies == ("react", "react-dom")


def test_react_below_threshold(make_view):
    assert detect_react(make_view(("src/widget.jsx", "const x = 1;\n"))) == []


def test_react_import_with_wrapped_name_list(make_view):
    component = (
        "import {\n"
        "  useState,\n"
        "  useEffect,\n"
        "} from 'react'\n"
        "export const Counter = () => null\n"
    )
    found = detect_react(make_view(("src/counter.jsx", component)))
    assert _names(found) == ["React"]
    assert found[0].dependencies == ("react",)


def test_plain_import_lines_do_not_count_as_react(make_view):
    found = detect_react(make_view(("src/util.jsx", "import os\nimport sys\nprint('from react')\n")))
    assert found == []


def test_many_semicolon_free_modules_stay_fast(make_view):
    module = "import os\nimport sys\nimport json\n\n\ndef run(path):\n    return os.path.join(sys.prefix, path)\n"
    view = make_view(*((f"pkg/mod{i}.py", module) for i in range(400)))
    started = time.perf_counter()
    detect_frameworks(view)
    assert time.perf_counter() - started < 1.0


def test_nextjs_emitted_alongside_weak_react(make_view):
    page = (
        "import Link from 'next/link';\n"
        "export async function getStaticProps() { return { props: {} }; }\n"
    )
    found = detect_react(make_view(("pages/index.jsx", page), ("next.config.js", "module.exports = {}")))
    assert _names(found) == ["Next.js"]
    nextjs = found[0]
    assert nextjs.category is FrameworkCategory.FULLSTACK
    assert "next" in nextjs.dependencies
    # .jsx (35) + four indicators at 15 each
    assert nextjs.confidence == 95


def test_nextjs_needs_two_indicators(make_view):
    found = detect_react(make_view(("next.config.js", "module.exports = {}")))
    assert "Next.js" not in _names(found)


# ---------------------------------------------------------------------------
# Vue / Angular / Svelte
# ---------------------------------------------------------------------------


def test_vue_single_file_component(make_view):
    sfc = "<template><div/></template>\n<script>\nimport { ref } from 'vue'\n</script>\n"
    found = detect_vue(make_view(("src/App.vue", sfc)))
    assert _names(found) == ["Vue.js"]
    assert found[0].confidence == 80


def test_nuxt_from_config_file(make_view):
    found = detect_vue(make_view(("nuxt.config.ts", "export default {}")))
    assert _names(found) == ["Nuxt.js"]


def test_angular_confidence_is_capped(make_view):
    component = (
        "import { Component } from '@angular/core';\n"
        "@Component({ selector: 'app-root' })\n"
        "export class AppComponent {}\n"
    )
    found = detect_angular(make_view(("angular.json", "{}"), ("src/app/app.component.ts", component)))
    assert _names(found) == ["Angular"]
    assert found[0].confidence == 100
    assert found[0].config_files == ("angular.json",)


def test_sveltekit_without_svelte(make_view):
    config = "import { vitePreprocess } from '@sveltejs/kit/vite';\n"
    found = detect_svelte(make_view(("svelte.config.js", config)))
    assert _names(found) == ["SvelteKit"]
    assert found[0].confidence == 40


# ---------------------------------------------------------------------------
# Backend and mobile tables
# ---------------------------------------------------------------------------


def test_express_needs_both_signals(make_view):
    server = "const express = require('express');\n"
    assert "Express.js" not in _names(detect_frameworks(make_view(("server.js", server))))

    server += "const app = express();\napp.listen(3000);\n"
    found = detect_frameworks(make_view(("server.js", server)))
    assert "Express.js" in _names(found)


def test_django_manage_py_alone_is_not_enough(make_view):
    assert detect_frameworks(make_view(("manage.py", "import os\n"))) == []


def test_django_with_imports(make_view):
    found = detect_frameworks(
        make_view(("manage.py", "import os\n"), ("blog/models.py", "from django.db import models\n"))
    )
    django = next(fw for fw in found if fw.name == "Django")
    assert django.confidence == 100
    assert django.language == "python"
    assert "manage.py" in django.config_files


def test_fastapi_detected(make_view):
    found = detect_frameworks(make_view(("main.py", "from fastapi import FastAPI\napp = FastAPI()\n")))
    assert _names(found) == ["FastAPI"]
    assert found[0].dependencies == ("fastapi",)


def test_flutter_from_pubspec(make_view):
    found = detect_frameworks(make_view(("pubspec.yaml", "name: app\n")))
    assert _names(found) == ["Flutter"]
    assert found[0].category is FrameworkCategory.MOBILE
    assert found[0].language == "dart"


def test_backend_rule_names_are_unique():
    names = [rule.name for rule in BACKEND_RULES]
    assert len(names) == len(set(names))


# ---------------------------------------------------------------------------
# Whole-project detection
# ---------------------------------------------------------------------------


def test_results_sorted_by_confidence(make_view):
    found = detect_frameworks(
        make_view(
            ("src/index.tsx", TSX_APP),
            ("server.py", "from flask import Flask\napp = Flask(__name__)\n"),
            ("pubspec.yaml", "name: app\n"),
        )
    )
    confidences = [fw.confidence for fw in found]
    assert confidences == sorted(confidences, reverse=True)
    assert {"React", "Flask", "Flutter"} <= set(_names(found))
    assert all(0 <= c <= 100 for c in confidences)


def test_no_frameworks_in_empty_project(make_view):
    assert detect_frameworks(make_view()) == []
