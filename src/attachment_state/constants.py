"""Named thresholds and lookup tables for Attachment State."""

# Attachment normalization
ATTACHMENT_CEILING = 200

# Bracket selection tiers (raw attachment)
EXTREME_ATTACHMENT = 200
HIGH_ATTACHMENT = 100
MEDIUM_ATTACHMENT = 50
LOW_ATTACHMENT_STEP = 25

# Sub-bracket routing (raw attachment + karma bias)
SUB_BRACKET_DESPERATION = 150
SUB_BRACKET_DEPENDENCY = 100
KARMA_BIAS_CEILING = 50

# Escalation
RESISTANCE_THRESHOLD = 3
REINFORCEMENT_THRESHOLD = 4
RESISTANCE_RESPONSES = frozenset({"resist", "ignore"})
REINFORCEMENT_RESPONSES = frozenset({"engage", "view"})

# Corruption
CORRUPTION_FLOOR = 100
CORRUPTION_SPAN = 100
CORRUPTION_DEAD_ZONE = 0.3
SENTENCE_CORRUPTION_BAND = 0.6
CHARACTER_CORRUPTION_BAND = 0.8
FRAGMENT_REPEAT_PROBABILITY = 0.3

# Presentation
MS_PER_CHARACTER = 50
COMPLEXITY_BASE_WORDS = 5
MS_PER_EXTRA_WORD = 100
MIN_DISPLAY_MS = 2000
MAX_DISPLAY_MS = 15000

# Response handling
IMPACT_BASELINE = 50
SEDUCTIVE_ATTACHMENT = 150
DESPERATE_ATTACHMENT = 100
INSISTENT_HISTORY_LENGTH = 3

RESPONSE_DELTAS = {
    "engage": 15,
    "view": 10,
    "click": 12,
    "save": 20,
    "share": 18,
    "ignore": -5,
    "resist": -8,
    "recognize": -25,
    "understand": -30,
    "let_go": -35,
    "dismiss": -3,
}

# Karma side effects pushed to the consciousness store
RESPONSE_KARMA = {
    "recognize": {"computational": 5, "emotional": 3, "void": -5},
    "understand": {"computational": 10, "emotional": 5, "void": -10},
    "let_go": {"emotional": 5, "void": -10},
    "engage": {"emotional": -2, "computational": -1},
    "view": {"emotional": -2, "computational": -1},
    "click": {"emotional": -2, "computational": -1},
    "save": {"emotional": -2, "computational": -1},
    "share": {"emotional": -2, "computational": -1},
}

# States
TERMINAL_STATE = "dissolution"
NO_OP_STATES = frozenset({"waiting"})

# Sin confrontation
SIN_SEVERITY_HOSTILITY = {"low": 30, "medium": 60, "high": 85, "critical": 100}
DEFAULT_SIN_HOSTILITY = 50
HOSTILITY_VARIANCE = 20
MIN_INITIAL_HOSTILITY = 10
MAX_INITIAL_HOSTILITY = 100
SIN_SEVERITY_WEIGHT = {"low": 1, "medium": 3, "high": 7, "critical": 15}
BASE_AGGRESSION = 0.5

DENIAL_HOSTILITY_FACTOR = 1.5
DENIAL_HOSTILITY_CAP = 150
DENIAL_AGGRESSION = 0.3
DENIAL_PENALTY_BASE = 1.5
COMBAT_HOSTILITY_FACTOR = 2
COMBAT_HOSTILITY_CAP = 200
JUSTIFICATION_CORRUPTION = 0.2
JUSTIFICATION_PENALTY = 1.2
ACCEPTANCE_RELIEF = 30
ACCEPTANCE_CALM = 0.4
PACIFIED_HOSTILITY = 10
IGNORED_HOSTILITY = 20
IGNORED_AGGRESSION = 0.2
DELETION_HOSTILITY_FLOOR = 100

# Karma dimension restored when a sin of each category dissolves
SIN_KARMA_DIMENSIONS = {
    "communication": "emotional",
    "social": "emotional",
    "security": "computational",
    "privacy": "computational",
    "productivity": "temporal",
    "consumption": "temporal",
}
