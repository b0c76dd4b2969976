# Setter capability: set_score at or above this marks a setter
SETTER_THRESHOLD = 4

# Defaults applied to missing roster fields
DEFAULT_SKILL_RATING = 3
DEFAULT_HEIGHT = 0.0

# Balancing needs at least this many full teams
MIN_TEAMS = 2

# Cost function weights
DEFAULT_WEIGHT_SCORE = 1.0
DEFAULT_WEIGHT_HEIGHT = 1.0

# Rotation suggestions per reserve
DEFAULT_TOP_N = 2

# Team size used by the command line when none is given
DEFAULT_TEAM_SIZE = 6
