# src/pitchreplay/config_templates.py
"""Configuration file templates."""

CONFIG_TEMPLATE = """# pitchreplay configuration

[paths]
# Directory holding <match_id>_metadata.csv, _lineup.csv, _tracking.csv
# and _set_pieces.csv exports
data_dir = "~/.pitchreplay/data"

[playback]
# Rescale coordinates to a 105 x 68 reference pitch
normalize_pitch_size = false
# One of 0, 0.5, 1, 2, 4
speed = 1.0
# 1H or 2H
period = "1H"
# Team whose set pieces are shown and whose attack direction is kept constant
attack_reference_team = "Denmark"
# Data adapter (csv, memory)
adapter = "csv"

[alignment]
# Fill these in for every new match.
# Offsets (seconds) added to event-provider timestamps per half:
# "<match_id>" = [first_half_offset, second_half_offset]
[alignment.offsets]
# "3812" = [1.2, -0.4]

# Mirroring policy per match; true (the default) mirrors second-half positions
[alignment.flip]
# "3812" = false
"""
