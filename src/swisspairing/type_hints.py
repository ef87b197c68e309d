"""Type hints used in Swiss Pairing."""

from typing import Literal, Optional

# Chess color string constants (for runtime use)
WHITE = "white"
BLACK = "black"

# Basically, white or black
Colour = Literal["white", "black"]

# Result codes as stored on a pairing
Result = Literal["1-0", "0-1", "1/2-1/2", "BYE"]
MaybeResult = Optional[Result]

# Tournament lifecycle status
Status = Literal["SETUP", "IN_PROGRESS", "COMPLETED"]
