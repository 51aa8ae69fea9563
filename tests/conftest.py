"""Shared fixtures: a sample post and an in-memory layout store"""

import pytest

from postpress.core.layouts import LayoutStore


POST_MD = """\
---
layout: post
permalink: /2014/angular-module-conventions/
title: Structuring Angular modules
path: _posts/2014-03-02-angular-module-conventions.md
---

# One module per file

Declare the module once and *retrieve* it everywhere else:

```javascript
var app = angular.module('app', []);
```

See the [style guide](https://example.com/guide) for more.
"""

LAYOUTS = {
    "default": "<html><head><title>{{ title }}</title></head><body>{{ content }}</body></html>\n",
    "post": "---\nlayout: default\n---\n<article data-permalink=\"{{ permalink }}\">{{ content }}</article>\n",
}


@pytest.fixture(name="post_md")
def post_md_fixture():
    return POST_MD


@pytest.fixture(name="layout_templates")
def layout_templates_fixture():
    return dict(LAYOUTS)


@pytest.fixture(name="layouts")
def layouts_fixture():
    return LayoutStore.from_mapping(LAYOUTS)


@pytest.fixture(name="layouts_dir")
def layouts_dir_fixture(tmp_path):
    """LAYOUTS written to disk as *.html files."""
    d = tmp_path / "_layouts"
    d.mkdir()
    for name, text in LAYOUTS.items():
        (d / f"{name}.html").write_text(text)
    return d
