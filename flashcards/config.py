MIN_SCORE = 0
MAX_SCORE = 5
PASSING_SCORE = 3          # scores below this reset the card

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3

FAILURE_INTERVAL_DAYS = 1
FIRST_INTERVAL_DAYS = 1    # first successful repetition
SECOND_INTERVAL_DAYS = 6   # second successful repetition

SUBJECT_REVIEW_DAYS = 7    # fixed revisit period for studied subjects

MAX_INTERVAL_DAYS = 2_147_483_647  # PositiveIntegerField upper bound
