from .boustrophedon import (
    BoustrophedonPath,
    make_trajectory,
    normalized_speed,
    normalized_speeds,
    MIN_SPEED,
    MAX_SPEED,
    ROW_PITCH,
)
