"""Fixtures for loading real test files from disk."""

from pathlib import Path

import pytest

PASSING_SPEC = '''
from fixtest import case, expect, fixture, test


@fixture("Arithmetic")
class ArithmeticSpec:
    @case(1, 2, 3)
    @case(2, 2, 4)
    def adds(self, a, b, total):
        expect(a + b).to_be(total)

    @test("knows structural equality")
    def equality(self):
        expect({"a": [1, 2]}).to_equal({"a": [1, 2]})
'''

MIXED_SPEC = '''
import asyncio

from fixtest import expect, fixture, ignore, setup, teardown, test

__all__ = ["MixedSpec", "IgnoredSpec"]

EVENTS = []


@fixture()
class MixedSpec:
    @setup
    def before(self):
        self.items = []

    @teardown
    def after(self):
        EVENTS.append("teardown")

    @test()
    async def waits(self):
        await asyncio.sleep(0)
        self.items.append(1)
        expect(self.items).to_equal([1])

    @test()
    def fails(self):
        expect("abc").to_contain("z")

    @test()
    def errors(self):
        raise RuntimeError("unexpected")


@ignore("not yet")
class IgnoredSpec:
    @test()
    def never(self):
        raise AssertionError("must not run")


@fixture()
class NotExported:
    @test()
    def hidden(self):
        pass
'''


@pytest.fixture
def spec_dir(tmp_path: Path) -> Path:
    """Create a directory of test files, including broken ones."""
    (tmp_path / "math_spec.py").write_text(PASSING_SPEC)
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "mixed_spec.py").write_text(MIXED_SPEC)
    (nested / "syntax_spec.py").write_text("def broken(:\n")
    (tmp_path / "notes.txt").write_text("not a test file")
    return tmp_path
