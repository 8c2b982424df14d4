"""Rewrite biginteger/version.py, a docstring-only module holding a timestamped version string."""

import datetime

VERSION_BASE = '0.1.0'
VERSION_PY = 'biginteger/version.py'
yyyy_mmdd_hhmm_ss = datetime.datetime.now(datetime.timezone.utc).strftime('%Y.%m%d.%H%M.%S')
# EXAMPLE:  UTC timestamp "2026.1018.1200.00"

with open(VERSION_PY, 'w') as version_py:
    version_py.write('"""{base}.{stamp}"""'.format(base=VERSION_BASE, stamp=yyyy_mmdd_hhmm_ss))
    # EXAMPLE:  """0.1.0.2026.1018.1200.00"""
