# src/season_color/palette/seasonal_palettes.py
# Reference data for the 4 seasons / 12 subtypes of personal color analysis.
# Each subtype class carries a skin-tone L*a*b* reference (inside its season's
# measured range) and an array of 10 recommended swatches.
# Season-level ranges and the 12 PCCS tone prototypes follow below.

from season_color.conversion.color_spaces import hex_to_rgb


# ----------------------- Spring (warm, clear, light) -----------------------

class BrightSpring:
    season = "spring"
    subtype = "bright_spring"
    name = "Bright Spring"
    skin_reference = (67.0, 11.0, 14.0)
    palette = [hex_to_rgb(c) for c in [
        "#FF6F61",  # coral red
        "#FFA07A",  # light salmon
        "#FFD700",  # bright gold
        "#ADFF2F",  # green yellow (chartreuse)
        "#00FA9A",  # medium spring green
        "#40E0D0",  # turquoise
        "#1E90FF",  # dodger blue
        "#BA55D3",  # medium orchid (purple)
        "#FF69B4",  # hot pink
        "#FF4500",  # orange red
    ]]


class WarmSpring:
    season = "spring"
    subtype = "warm_spring"
    name = "Warm Spring"
    skin_reference = (68.0, 7.5, 16.5)
    palette = [hex_to_rgb(c) for c in [
        "#FFA500",  # orange
        "#FFD700",  # gold
        "#FF7F50",  # coral
        "#FFB347",  # pastel orange
        "#FFE135",  # banana yellow
        "#98FB98",  # pale green
        "#40E0D0",  # turquoise
        "#87CEEB",  # sky blue
        "#FF69B4",  # hot pink
        "#CD5C5C",  # indian red
    ]]


class LightSpring:
    season = "spring"
    subtype = "light_spring"
    name = "Light Spring"
    skin_reference = (73.5, 10.0, 12.5)
    palette = [hex_to_rgb(c) for c in [
        "#FFFACD",  # lemon chiffon
        "#FFDAB9",  # peach puff
        "#FAFAD2",  # light goldenrod yellow
        "#E0FFFF",  # light cyan
        "#E6E6FA",  # lavender
        "#FFB6C1",  # light pink
        "#FFE4E1",  # misty rose
        "#F5DEB3",  # wheat
        "#F0E68C",  # khaki
        "#B0E0E6",  # powder blue
    ]]


# ----------------------- Summer (cool, soft, light) -----------------------

class LightSummer:
    season = "summer"
    subtype = "light_summer"
    name = "Light Summer"
    skin_reference = (72.5, 10.0, 10.5)
    palette = [hex_to_rgb(c) for c in [
        "#B0E0E6",  # powder blue
        "#AFEEEE",  # pale turquoise
        "#E6E6FA",  # lavender
        "#D8BFD8",  # thistle
        "#F08080",  # light coral
        "#F5DEB3",  # wheat
        "#FFB6C1",  # light pink
        "#87CEFA",  # light sky blue
        "#D3D3D3",  # light gray
        "#F0FFF0",  # honeydew
    ]]


class CoolSummer:
    season = "summer"
    subtype = "cool_summer"
    name = "Cool Summer"
    skin_reference = (67.0, 13.0, 9.0)
    palette = [hex_to_rgb(c) for c in [
        "#4682B4",  # steel blue
        "#5F9EA0",  # cadet blue
        "#708090",  # slate gray
        "#6A5ACD",  # slate blue
        "#9370DB",  # medium purple
        "#DB7093",  # pale violet red
        "#C0C0C0",  # silver
        "#778899",  # light slate gray
        "#4169E1",  # royal blue
        "#8FBC8F",  # dark sea green
    ]]


class SoftSummer:
    season = "summer"
    subtype = "soft_summer"
    name = "Soft Summer"
    skin_reference = (68.0, 11.0, 11.5)
    palette = [hex_to_rgb(c) for c in [
        "#D8BFD8",  # thistle
        "#E0B0FF",  # mauve/lilac
        "#C3B1E1",  # light lavender
        "#DCDCDC",  # gainsboro (soft gray)
        "#B0C4DE",  # light steel blue
        "#C1CDC1",  # tea green / gray green
        "#E6E6FA",  # lavender
        "#AFEEEE",  # pale turquoise
        "#DDA0DD",  # plum
        "#BEBEBE",  # gray
    ]]


# ----------------------- Autumn (warm, muted, deep) -----------------------

class SoftAutumn:
    season = "autumn"
    subtype = "soft_autumn"
    name = "Soft Autumn"
    skin_reference = (66.0, 12.5, 15.5)
    palette = [hex_to_rgb(c) for c in [
        "#C9A27E",  # soft camel
        "#DAB88B",  # wheat
        "#E3C565",  # muted mustard
        "#B59F3B",  # olive gold
        "#8E9A6C",  # sage/olive
        "#6E8B74",  # soft moss
        "#A77E6B",  # dusty terracotta
        "#C27D6A",  # softened coral clay
        "#8AA39B",  # muted teal
        "#7A6A8E",  # dusty plum
    ]]


class WarmAutumn:
    season = "autumn"
    subtype = "warm_autumn"
    name = "Warm Autumn"
    skin_reference = (64.5, 11.0, 20.5)
    palette = [hex_to_rgb(c) for c in [
        "#C7773D",  # pumpkin
        "#E0892E",  # squash orange
        "#C49A00",  # curry/mustard
        "#8B6B2E",  # caramel
        "#7A8B2E",  # olive green
        "#3E6B47",  # forest green
        "#0F766E",  # teal (warm-leaning)
        "#2AB7CA",  # warm turquoise accent
        "#B5544D",  # paprika
        "#9A4D82",  # warm plum
    ]]


class DeepAutumn:
    season = "autumn"
    subtype = "deep_autumn"
    name = "Deep Autumn"
    skin_reference = (59.0, 13.5, 18.5)
    palette = [hex_to_rgb(c) for c in [
        "#7A3B1A",  # warm chocolate brown
        "#9C3D18",  # russet / burnt sienna
        "#B1470E",  # terracotta / burnt orange
        "#996515",  # deep golden caramel
        "#556B2F",  # deep olive green
        "#3A5A40",  # forest green
        "#2E6E60",  # deep turquoise
        "#5E2B3A",  # deep wine / burgundy
        "#6E3A2C",  # brick red / auburn
        "#4A3A2C",  # chocolate taupe / deep neutral
    ]]


# ----------------------- Winter (cool, clear, deep) -----------------------

class DeepWinter:
    season = "winter"
    subtype = "deep_winter"
    name = "Deep Winter"
    skin_reference = (58.0, 14.5, 12.0)
    palette = [hex_to_rgb(c) for c in [
        "#000000",  # black (ultimate contrast anchor)
        "#191970",  # midnight navy
        "#006A4E",  # emerald green (cool, clear)
        "#4B0082",  # indigo / royal purple
        "#8B0000",  # dark crimson / burgundy
        "#FF0000",  # true red (blue-based)
        "#FF1493",  # icy pink (frosted highlight)
        "#2E0854",  # deep plum / aubergine
        "#009999",  # dark cyan / turquoise
        "#8B008B",  # deep fuchsia / magenta
    ]]


class CoolWinter:
    season = "winter"
    subtype = "cool_winter"
    name = "Cool Winter"
    skin_reference = (63.0, 16.0, 11.0)
    palette = [hex_to_rgb(c) for c in [
        "#4169E1",  # royal blue
        "#0000FF",  # pure blue
        "#8A2BE2",  # blue violet
        "#20B2AA",  # light sea green
        "#00CED1",  # dark turquoise
        "#008080",  # teal
        "#DC143C",  # crimson
        "#FF0000",  # red
        "#808080",  # gray
        "#000000",  # black
    ]]


class ClearWinter:
    season = "winter"
    subtype = "clear_winter"
    name = "Clear Winter"
    skin_reference = (65.5, 12.5, 14.5)
    palette = [hex_to_rgb(c) for c in [
        "#FF1493",  # deep fuchsia
        "#DC143C",  # crimson red
        "#FF69B4",  # hot pink
        "#FF0000",  # pure red
        "#00CED1",  # dark turquoise
        "#1E90FF",  # dodger blue
        "#00BFFF",  # deep sky blue
        "#7B68EE",  # medium slate blue
        "#32CD32",  # bright lime green
        "#FFFF00",  # vivid yellow
    ]]


SUBTYPES = [
    BrightSpring, WarmSpring, LightSpring,
    LightSummer, CoolSummer, SoftSummer,
    SoftAutumn, WarmAutumn, DeepAutumn,
    DeepWinter, CoolWinter, ClearWinter,
]


# ----------------------- Season-level data -----------------------

# Measured skin L*a*b* ranges and population averages per season
SEASONS = {
    "spring": {
        "name": "Spring",
        "temperature": "warm", "clarity": "clear", "depth": "light",
        "lab_ranges": {"l": (65, 75), "a": (6, 12), "b": (12, 18)},
        "average": (67.58, 8.91, 14.23),
        "recommended": ["#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4",
                        "#FFEAA7", "#DDA0DD", "#98D8C8", "#F7DC6F"],
        "avoid": ["#2C3E50", "#34495E", "#7F8C8D", "#BDC3C7",
                  "#800080", "#4B0082", "#191970", "#2F4F4F"],
    },
    "summer": {
        "name": "Summer",
        "temperature": "cool", "clarity": "soft", "depth": "light",
        "lab_ranges": {"l": (66, 76), "a": (8, 14), "b": (8, 14)},
        "average": (67.92, 9.45, 11.70),
        "recommended": ["#B39DDB", "#90CAF9", "#80DEEA", "#A5D6A7",
                        "#FFCDD2", "#F8BBD9", "#E1BEE7", "#D7CCC8"],
        "avoid": ["#FF5722", "#E65100", "#BF360C", "#D84315",
                  "#FF6F00", "#F57C00", "#FF8F00"],
    },
    "autumn": {
        "name": "Autumn",
        "temperature": "warm", "clarity": "muted", "depth": "deep",
        "lab_ranges": {"l": (58, 68), "a": (10, 16), "b": (14, 22)},
        "average": (62.09, 11.25, 16.54),
        "recommended": ["#D2691E", "#CD853F", "#DEB887", "#F4A460",
                        "#8B4513", "#A0522D", "#DAA520"],
        "avoid": ["#E8F5E8", "#F0F8FF", "#E6E6FA", "#F5F5DC",
                  "#00CED1", "#20B2AA", "#48D1CC", "#40E0D0"],
    },
    "winter": {
        "name": "Winter",
        "temperature": "cool", "clarity": "clear", "depth": "deep",
        "lab_ranges": {"l": (57, 67), "a": (11, 17), "b": (10, 16)},
        "average": (61.41, 12.46, 13.82),
        "recommended": ["#000080", "#4B0082", "#8B008B", "#DC143C",
                        "#FF1493", "#FF69B4", "#00BFFF", "#1E90FF"],
        "avoid": ["#F5DEB3", "#DEB887", "#D2B48C", "#BC8F8F",
                  "#CD853F", "#DAA520", "#B8860B", "#FF8C00"],
    },
}


# ----------------------- PCCS tone prototypes -----------------------

# (name, brightness, saturation, seasons); order is the tie-break order
TONE_PROTOTYPES = [
    # high lightness
    ("pale",          85, 20, ("spring", "summer")),
    ("light",         75, 35, ("spring", "summer")),
    ("bright",        70, 85, ("spring", "winter")),
    # mid lightness
    ("soft",          60, 30, ("spring", "summer")),
    ("strong",        50, 75, ("autumn", "winter")),
    ("vivid",         55, 95, ("spring", "winter")),
    # low lightness
    ("deep",          35, 70, ("autumn", "winter")),
    ("dark",          25, 45, ("autumn", "winter")),
    # grayish
    ("light_grayish", 65, 15, ("summer",)),
    ("grayish",       50, 20, ("summer", "autumn")),
    ("dark_grayish",  35, 25, ("autumn",)),
    ("dull",          45, 35, ("autumn", "summer")),
]
