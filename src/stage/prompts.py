"""Narrative text injected ahead of generation.

``{{user}}`` and ``{{char}}`` are left for the downstream generator to
resolve; the throws are filled in here with ``str.format``.
"""

PREAMBLE = "This universe is secretly and tacitly ruled by the will of rock-paper-scissors."

NO_GAME = "But no one is playing rock-paper-scissors in this moment."

INVOCATION = "{{{{user}}}} has invoked the universe's will by throwing {user_played}. "

TIE = (
    "Depict an opposing party that will now throw {other_played}, resulting in a tie. "
    "As a result, the universe will simply abide."
)

VICTORY = (
    "Depict an opposing party, perhaps {{{{char}}}}, that will now throw {other_played}, "
    "resulting in {{{{user}}}}'s unilateral victory; the universe will bend to achieve "
    "{{{{user}}}}'s current objective or intent, no matter how ridiculous."
)

DEFEAT = (
    "Depict an opposing party, perhaps {{{{char}}}}, that will now throw {other_played}, "
    "resulting in {{{{user}}}}'s unilateral defeat; the universe will subvert "
    "{{{{user}}}}'s current objective or intent in ridiculous fashion."
)

RECORD = "record: {wins}-{losses}-{ties}"

SCOREBOARD = "---\n{{{{user}}}}'s {record}."
