"""
Pytest configuration for local imports and shared test doubles.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


class FixedAdvanceMeasurer:
	"""
	Measurer with a per-character advance table; unknown characters use 10.
	"""

	def __init__(self, widths: dict[str, float] | None = None, default_width: float = 10.0):
		self.widths = widths or {}
		self.default_width = default_width
		self.calls: list[str] = []

	def char_width(self, char: str) -> float:
		return self.widths.get(char, self.default_width)

	def measure(self, text: str, font_family: str, font_size: int) -> float:
		self.calls.append(text)
		return float(sum(self.char_width(char) for char in text))


class RecordingSurface:
	"""
	Surface stand-in that records paint operations.
	"""

	def __init__(self):
		self.fills: list[tuple[int, int, int, int, str]] = []
		self.texts: list[tuple[float, float, str, str, int, str]] = []
		self.operations: list[str] = []

	def fill_rect(self, x: int, y: int, width: int, height: int, color: str) -> None:
		self.fills.append((x, y, width, height, color))
		self.operations.append("fill")

	def draw_text(self, x: float, y: float, text: str, font_family: str, font_size: int, color: str) -> None:
		self.texts.append((x, y, text, font_family, font_size, color))
		self.operations.append("text")


#============================================
@pytest.fixture
def measurer() -> FixedAdvanceMeasurer:
	return FixedAdvanceMeasurer({"1": 8.0, ":": 4.0, "W": 14.0})


#============================================
@pytest.fixture
def recording_surface() -> RecordingSurface:
	return RecordingSurface()
