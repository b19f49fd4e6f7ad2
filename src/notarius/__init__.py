# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Stroke translation stages
# steno level:
# stage 0: device or stdin; issue raw stroke strings
# stage 1: parse raw strings into Strokes

# translation level:
# stage 2: match strokes against the dictionary, longest phrase first
# stage 3: resolve retroactive actions and render the history window
# stage 4: diff old and new text into a correction; dispatch it along with any commands
