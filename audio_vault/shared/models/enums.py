"""
Enums used across the application.

Values are the human-readable labels the client sends and displays.
"""

from enum import Enum


class ItemPrivacy(str, Enum):
    """Who can see a catalog item."""

    PUBLIC = "Public"
    PRIVATE = "Private"


class ItemStatus(str, Enum):
    """What the owner intends to do with an item."""

    PERSONAL_COLLECTION = "Personal Collection"
    FOR_SALE = "For Sale"
    FOR_TRADE = "For Trade"


class ItemType(str, Enum):
    """Kind of audio component."""

    RECEIVER = "Receiver"
    TURNTABLE = "Turntable"
    SPEAKERS = "Speakers"
    AMPLIFIER = "Amplifier"
    PRE_AMPLIFIER = "Pre-amplifier"
    TAPE_DECK = "Tape Deck"
    CD_PLAYER = "CD Player"
    EQUALIZER = "Equalizer"
    TUNER = "Tuner"
    INTEGRATED_AMPLIFIER = "Integrated Amplifier"
    OTHER = "Other"


class ItemCondition(str, Enum):
    """Owner-assessed condition grade."""

    MINT = "Mint"
    NEAR_MINT = "Near Mint"
    EXCELLENT = "Excellent"
    VERY_GOOD = "Very Good"
    GOOD = "Good"
    FAIR = "Fair"
    FOR_PARTS = "For Parts/Not Working"
    RESTORED = "Restored"


class FindType(str, Enum):
    """
    Origin of a saved AI analysis.

    WILD_FIND: photo scan of equipment spotted in the wild
    AD_ANALYSIS: analysis of a third-party sale listing
    """

    WILD_FIND = "Wild Find"
    AD_ANALYSIS = "Ad Analysis"
