from ..utils import logger
from ._errors import SelectionError
from ._fontfinder import FontFile, get_all_fonts


class FontProvider:
    """Storage and discovery of font families.

    The provider maps family names to the font files (faces) of that
    family. It is the only place where fontwrap looks at the fonts
    installed on the system.

    Parameters:
        fonts (iterable, optional): FontFile objects or filenames to
            populate the provider with. If not given, the fonts available
            on the system are loaded on first use.

    There is a singleton instance of this class at ``fontwrap.text.font_provider``.
    """

    def __init__(self, fonts=None):
        self._family_to_font = {}  # name -> variant -> FontFile
        self._loaded = fonts is not None
        for font_file in fonts or ():
            self.add_font_file(font_file)

    def __repr__(self):
        return f"<FontProvider with {len(self._family_to_font)} families at 0x{hex(id(self))}>"

    def add_font_file(self, font_file):
        """Add the given font_file to the collection of fonts. The
        font_file can be a filename or a FontFile object. Returns the
        FontFile object for the font.
        """
        # Obtain FontFile object
        if isinstance(font_file, FontFile):
            ff = font_file
        elif isinstance(font_file, str):
            ff = FontFile(font_file)
        else:
            raise TypeError("add_font_file() expects FontFile or str filename.")

        # Select on family name
        variants = self._family_to_font.setdefault(ff.family, {})

        # Warn for duplicates
        if ff.variant in variants:
            old = variants[ff.variant]
            logger.debug(f"Duplicate font {ff.name} ({old.filename} -> {ff.filename})")

        # Store
        variants[ff.variant] = ff
        return ff

    def _ensure_loaded(self):
        # Scanning the system is slow-ish, so only do it when needed
        if not self._loaded:
            self._loaded = True
            for ff in get_all_fonts():
                self.add_font_file(ff)
            logger.info(f"Font provider found {len(self._family_to_font)} families")

    def get_fonts(self):
        """Get a list of all registered FontFile objects. E.g. to show a list
        of all available fonts:
        ``for ff in font_provider.get_fonts(): print(ff.family, "-", ff.variant)``
        """
        self._ensure_loaded()
        fonts = []
        for family in sorted(self._family_to_font.keys()):
            for ff in self._family_to_font[family].values():
                fonts.append(ff)
        return fonts

    def list_families(self):
        """Get a sorted list of the names of all available font families."""
        self._ensure_loaded()
        return sorted(self._family_to_font.keys())

    def resolve_family(self, name):
        """Get the list of FontFile objects for the given family name.

        An exact match is preferred, but the name is also matched
        case-insensitively. Raises SelectionError if the family is unknown.
        """
        if not isinstance(name, str):
            cls = type(name).__name__
            raise TypeError(f"Font family must be str, not '{cls}'")
        self._ensure_loaded()

        variants = self._family_to_font.get(name)
        if variants is None:
            lower_name = name.lower()
            for family, family_variants in self._family_to_font.items():
                if family.lower() == lower_name:
                    variants = family_variants
                    break
            else:
                raise SelectionError(f"Font family not found: '{name}'")
        return list(variants.values())


# Instantiate the global/default font provider
font_provider = FontProvider()


def list_font_families():
    """Names of the font families available through the default font provider."""
    return font_provider.list_families()
