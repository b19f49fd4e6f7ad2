# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
class NotariusError(Exception):
    pass


class SettingsError(NotariusError):
    pass
