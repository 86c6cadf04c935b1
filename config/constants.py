# Pile de couches affichée au démarrage (H, W, C par couche).
DEFAULT_LAYERS = [
    {"name": "Input (x)", "H": 180, "W": 320, "C": 2},
    {"name": "Initial Max Pool", "H": 45, "W": 80, "C": 1},
    {"name": "self.conv1", "H": 42, "W": 77, "C": 8},
    {"name": "Post-Conv1 Max Pool", "H": 21, "W": 38, "C": 8},
    {"name": "self.lif1", "H": 21, "W": 38, "C": 8},
    {"name": "self.conv2", "H": 18, "W": 35, "C": 16},
    {"name": "Post-Conv2 Max Pool", "H": 9, "W": 17, "C": 16},
    {"name": "self.lif2", "H": 9, "W": 17, "C": 16},
    {"name": "Flatten", "H": 1, "W": 1, "C": 2448},
    {"name": "self.fc1", "H": 1, "W": 1, "C": 1},
    {"name": "self.lif3", "H": 1, "W": 1, "C": 1},
]

# Légende type -> couleur (format 0xRRGGBB), l'ordre compte pour la résolution.
DEFAULT_COLOR_MAP = {
    "Input": 0x4285F4,
    "Pool": 0xDB4437,
    "Conv": 0xF4B400,
    "LIF": 0x0F9D58,
    "Flatten": 0xAB47BC,
    "FC": 0xFF6D00,
}
DEFAULT_COLOR = 0xAAAAAA
DEFAULT_TYPE = "Default"

# Types reconnus même s'ils ont été retirés de la légende.
FALLBACK_TYPES = (
    ("input", "Input"),
    ("pool", "Pool"),
    ("conv", "Conv"),
    ("lif", "LIF"),
    ("flatten", "Flatten"),
    ("fc", "FC"),
)

# Paramètres visuels par défaut
DEFAULT_GAP = 2.0
DEFAULT_LABEL_DISTANCE = 3.0
DEFAULT_LABEL_FONT_SIZE = 12
DEFAULT_BLOCK_OPACITY = 0.85
DEFAULT_MULTIPLIER = 1.5
MIN_CALLOUT_OFFSET = 0.1
CALLOUT_INSET = 0.2

# Polices
FONT_FAMILIES = ["Times New Roman", "Arial", "Courier New", "Georgia", "Verdana"]
DEFAULT_FONT_FAMILY = "Times New Roman"
PANEL_FONT_FAMILY = "Space Mono"

# Scène
BACKGROUND_COLOR = 0xFFFFFF
OUTLINE_COLOR = 0x000000
OUTLINE_WIDTH = 2.0
CALLOUT_COLOR = 0x555555
CALLOUT_WIDTH = 1.0
LIGHT_DIRECTION = (1.0, 1.0, 0.5)
FRUSTUM_SIZE = 100.0
CAMERA_AZIMUTH = 135.0  # avec up="+y", oeil du côté +x +z
CAMERA_ELEVATION = 35.264  # atan(1 / sqrt(2)): oeil en (40, 40, 40) par rapport au centre

# Couches / types ajoutés depuis le panneau d'édition
NEW_LAYER = {"name": "New Layer", "H": 1, "W": 1, "C": 1}
NEW_TYPE_NAME = "NewType"
NEW_TYPE_COLOR = "#aaaaaa"

# Bornes des sliders: (min, max, pas)
SLIDER_RANGES = {
    "label_distance": (0.0, 10.0, 0.1),
    "gap": (0.0, 10.0, 0.1),
    "label_font_size": (8, 32, 1),
    "block_opacity": (0.1, 1.0, 0.05),
    "height_multiplier": (0.5, 5.0, 0.1),
    "width_multiplier": (0.5, 5.0, 0.1),
    "channel_multiplier": (0.5, 5.0, 0.1),
}
