"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_POST = """\
---
title: "Hello"
date: 2020-01-01 10:00:00 +0000
tags: [a, b]
---
Body text."""

FULL_POST = """\
---
title: Understanding ES6 Modules
date: 2016-05-10 21:30:00 +0800
categories:
- JavaScript
- Modules
tags: [es6, 'commonjs', "requirejs"]
toc: true
author: someone
---
ES6 modules differ from [CommonJS](http://wiki.commonjs.org/wiki/Modules/1.1) in several ways.

```js
import { foo } from './foo';
```

See also [RequireJS](https://requirejs.org/).

```
plain fence
```
"""


@pytest.fixture(name="sample_post")
def sample_post_fixture():
    return SAMPLE_POST


@pytest.fixture(name="full_post")
def full_post_fixture():
    return FULL_POST


@pytest.fixture(name="posts_dir")
def posts_dir_fixture(tmp_path):
    """A directory with two valid posts, one broken post, and a non-markdown file."""
    root = tmp_path / "posts"
    (root / "2016").mkdir(parents=True)
    (root / "hello.md").write_text(SAMPLE_POST, encoding="utf-8")
    (root / "2016" / "es6-modules.md").write_text(FULL_POST, encoding="utf-8")
    (root / "broken.md").write_text("# No front matter\n", encoding="utf-8")
    (root / "notes.txt").write_text("ignored", encoding="utf-8")
    return root
