"""
Host font resolution for CSS-like font family lists.
"""

# PIP3 modules
import PIL.ImageFont


GENERIC_FAMILY_FILES = {
	"sans-serif": ("DejaVuSans.ttf", "Arial.ttf", "arial.ttf", "LiberationSans-Regular.ttf", "Helvetica.ttc"),
	"serif": ("DejaVuSerif.ttf", "Times New Roman.ttf", "times.ttf", "LiberationSerif-Regular.ttf"),
	"monospace": ("DejaVuSansMono.ttf", "Courier New.ttf", "cour.ttf", "LiberationMono-Regular.ttf"),
}

NAMED_FAMILY_FILES = {
	"microsoft yahei ui": ("msyh.ttc", "msyh.ttf", "Microsoft YaHei UI.ttf"),
	"microsoft yahei": ("msyh.ttc", "msyh.ttf", "Microsoft YaHei.ttf"),
	"simhei": ("simhei.ttf", "SimHei.ttf"),
	"arial": ("arial.ttf", "Arial.ttf", "LiberationSans-Regular.ttf"),
	"helvetica": ("Helvetica.ttc", "LiberationSans-Regular.ttf"),
}

_FONT_CACHE: dict[tuple[str, int], PIL.ImageFont.ImageFont | PIL.ImageFont.FreeTypeFont] = {}


#============================================
def split_family_list(font_family: str) -> list[str]:
	"""
	Split a family list like "SimHei, Arial, sans-serif" into names.

	Args:
		font_family: Comma separated family list.

	Returns:
		Family names with quotes and whitespace removed.
	"""
	names: list[str] = []
	for part in (font_family or "").split(","):
		name = part.strip().strip("'\"").strip()
		if name:
			names.append(name)
	return names


#============================================
def candidate_font_files(family: str) -> list[str]:
	"""
	List font file names to try for one family name.

	Args:
		family: Single family name.

	Returns:
		Candidate file names or paths.
	"""
	key = family.lower()
	if key in GENERIC_FAMILY_FILES:
		return list(GENERIC_FAMILY_FILES[key])
	candidates = list(NAMED_FAMILY_FILES.get(key, ()))
	candidates.append(family)
	if not family.lower().endswith((".ttf", ".ttc", ".otf")):
		candidates.append(f"{family}.ttf")
		candidates.append(f"{family.replace(' ', '')}.ttf")
	return candidates


#============================================
def resolve_font(font_family: str, font_size: int):
	"""
	Resolve a family list to a Pillow font at the given pixel size.

	The first family with a loadable font file wins. When none resolves,
	Pillow's bundled default font is used at the requested size.

	Args:
		font_family: Comma separated family list.
		font_size: Font size in pixels.

	Returns:
		Pillow font object.
	"""
	cache_key = (font_family, font_size)
	cached = _FONT_CACHE.get(cache_key)
	if cached is not None:
		return cached

	font = None
	for family in split_family_list(font_family):
		for candidate in candidate_font_files(family):
			try:
				font = PIL.ImageFont.truetype(candidate, font_size)
			except OSError:
				continue
			break
		if font is not None:
			break
	if font is None:
		font = PIL.ImageFont.load_default(size=font_size)
	_FONT_CACHE[cache_key] = font
	return font


#============================================
def clear_font_cache() -> None:
	"""
	Drop all resolved fonts.
	"""
	_FONT_CACHE.clear()
