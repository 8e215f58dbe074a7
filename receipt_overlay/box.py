"""
Box descriptor parsing.
"""

# Standard Library
import dataclasses
import re


INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclasses.dataclass(frozen=True)
class Box:
	x1: int
	y1: int
	x2: int
	y2: int

	@property
	def width(self) -> int:
		return self.x2 - self.x1

	@property
	def height(self) -> int:
		return self.y2 - self.y1

	@property
	def center_y(self) -> float:
		return self.y1 + self.height / 2.0


#============================================
def parse_int_token(token: str) -> int | None:
	"""
	Parse one box token as a plain base-10 integer.

	Args:
		token: Raw token, surrounding whitespace allowed.

	Returns:
		Parsed int or None.
	"""
	value = token.strip()
	if not INTEGER_PATTERN.fullmatch(value):
		return None
	return int(value)


#============================================
def parse_box(descriptor: str | None) -> Box | None:
	"""
	Parse an "x1,y1,x2,y2" descriptor into a Box.

	Coordinates are source-image pixels. Nothing is clamped against the
	image, so out-of-range boxes pass through unchanged.

	Args:
		descriptor: Comma separated descriptor.

	Returns:
		Box, or None when the descriptor is malformed.
	"""
	if descriptor is None:
		return None
	tokens = descriptor.split(",")
	if len(tokens) != 4:
		return None
	values: list[int] = []
	for token in tokens:
		value = parse_int_token(token)
		if value is None:
			return None
		values.append(value)
	return Box(values[0], values[1], values[2], values[3])
