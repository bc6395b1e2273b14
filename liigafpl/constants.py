"""Constants and mappings for the liigafpl scoring engine."""

# Player positions, goalkeeper first
POSITIONS = ('GK', 'DEF', 'MID', 'FWD')
OUTFIELD_POSITIONS = ('DEF', 'MID', 'FWD')

# Minutes played buckets as entered by the admin
MINUTES_BUCKETS = ('0', '1_59', '60+')
DNP_MINUTES = '0'

# Points per rule
MINUTES_POINTS = {
    '0': 0,
    '1_59': 1,
    '60+': 2,
}

GOAL_POINTS = {
    'GK': 10,
    'DEF': 6,
    'MID': 5,
    'FWD': 4,
}

CLEAN_SHEET_POINTS = {
    'GK': 4,
    'DEF': 4,
    'MID': 1,
    'FWD': 0,
}

# Penalty saves only count for goalkeepers
PENALTY_SAVE_POINTS = {
    'GK': 3,
    'DEF': 0,
    'MID': 0,
    'FWD': 0,
}

ASSIST_POINTS = 3
PENALTY_MISS_POINTS = -2
YELLOW_CARD_POINTS = -1
RED_CARD_POINTS = -3
OWN_GOAL_POINTS = -2

# Formation limits on the pitch: position -> (min, max)
FORMATION_LIMITS = {
    'GK': (1, 1),
    'DEF': (3, 5),
    'MID': (3, 5),
    'FWD': (1, 3),
}

# Which DNP starter queue a bench player drains, own position first
SUB_FALLBACK_ORDER = {
    'DEF': ('DEF', 'MID', 'FWD'),
    'MID': ('MID', 'DEF', 'FWD'),
    'FWD': ('FWD', 'MID', 'DEF'),
}

# Squad shape
STARTING_XI_SIZE = 11
BENCH_SIZE = 4
BENCH_GK_SLOT = 0
