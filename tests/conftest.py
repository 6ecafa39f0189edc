"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local goimpl package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of goimpl modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("goimpl"):
        del sys.modules[module_name]


FOO_SOURCE = """\
package foo

import "io"

type Foo struct {
\tw io.Writer
}

func NewFoo() *Foo {
\treturn &Foo{}
}
"""

GENERIC_SOURCE = """\
package store

type Store[K comparable, V any] interface {
\tGet(key K) (V, bool)
\tPut(key K, value V)
}

type Closer interface {
\tClose() error
}

type (
\tGetter[T any] interface {
\t\tGet() T
\t}
\tPlain interface{ Do() }
)
"""


@pytest.fixture
def foo_file(tmp_path: Path) -> Path:
    """A Go file declaring struct Foo at line 5 (1-based)."""
    path = tmp_path / "foo.go"
    path.write_text(FOO_SOURCE)
    return path


@pytest.fixture
def generic_file(tmp_path: Path) -> Path:
    """A Go file with generic and plain interfaces."""
    path = tmp_path / "store.go"
    path.write_text(GENERIC_SOURCE)
    return path
