"""
Physical Constants and GIRO Protocol Constants for hfprop

This module contains the spherical-Earth constants used by the single-hop
geometry and the fixed strings of the GIRO DIDBase text protocol.
"""

import numpy as np

# Earth parameters (single-hop model uses a 40000 km circumference sphere)
EARTH_CIRCUMFERENCE_KM = 40000.0
EARTH_RADIUS_KM = EARTH_CIRCUMFERENCE_KM / 2 / np.pi

# Upper bound for the inverse take-off angle search (km)
MAX_SCAN_DISTANCE_KM = int(round(EARTH_RADIUS_KM))

# Conversion factor
RAD_TO_DEG = 180.0 / np.pi

# hmF2 at or below this is a sounding error, not a layer height (km)
MIN_VALID_HMF2_KM = 10.0

# GIRO DIDBase endpoint and query keys
GIRO_BASE_URL = "https://lgdc.uml.edu/common/DIDBGetValues"
GIRO_KEY_URSI_CODE = "ursiCode"
GIRO_KEY_CHAR_NAME = "charName"
GIRO_KEY_DMUF = "DMUF"
GIRO_KEY_FROM_DATE = "fromDate"
GIRO_KEY_TO_DATE = "toDate"

# Request window format (UTC, no zone suffix) and response timestamp format
GIRO_TIME_FORMAT_IN = "%Y-%m-%d %H:%M:%S"
GIRO_TIME_FORMAT_OUT = "%Y-%m-%dT%H:%M:%S.%fZ"

GIRO_ERROR_TOKEN = "ERROR:"
GIRO_COMMENT_PREFIX = "#"

DEFAULT_URSI_CODE = "JR055"  # Juliusruh
DEFAULT_MUF_DISTANCE_KM = 3000.0
DEFAULT_TIMEOUT_SEC = 15.0
DEFAULT_WINDOW_HOURS = 1.0

HMF2 = "hmF2"

# Scaled characteristics served by DIDBase
CHARACTERISTICS = {
    'foF2': 'F2 layer critical frequency',
    'foF1': 'F1 layer critical frequency',
    'foE': 'E layer critical frequency',
    'foEs': 'Es layer critical frequency',
    'fbEs': 'Blanketing frequency of Es-layer',
    'foEa': 'Critical frequency of auroral E-layer',
    'foP': 'Critical frequency of F region patch trace',
    'fxI': 'Maximum frequency of F trace',
    'MUFD': 'Maximum usable frequency at reference distance (DMUF, default 3000 km)',
    'MD': 'MUF(D)/foF2',
    'hF2': 'Minimum virtual height of F2 trace',
    'hF': 'Minimum virtual height of F trace',
    'hE': 'Minimum virtual height of E trace',
    'hEs': 'Minimum virtual height of Es trace',
    'hEa': 'Minimum virtual height of auroral E trace',
    'hP': 'Minimum virtual height of F patch trace',
    'TypeEs': 'Type of Es layer(s)',
    'hmF2': 'Peak height F2-layer',
    'hmF1': 'Peak height F1-layer',
    'hmE': 'Peak height of E-layer',
    'zhalfNm': 'True height at 1/2 NmF2',
    'yF2': 'Half thickness of F2-layer',
    'yF1': 'Half thickness of F1-layer',
    'yE': 'Half thickness of E-layer',
    'scaleF2': 'Scale height at the F2-peak',
    'B0': 'IRI thickness parameter',
    'B1': 'IRI profile shape parameter',
    'D1': 'IRI profile shape parameter',
    'TEC': 'Ionogram-derived total electron content',
    'FF': 'Frequency spread between fxF2 and fxI',
    'FE': 'Frequency spread beyond foE',
    'QF': 'Range spread of F-layer',
    'QE': 'Range spread of E-layer',
    'fmin': 'Minimum frequency of echoes',
    'fminF': 'Minimum frequency of F-layer echoes',
    'fminE': 'Minimum frequency of E-layer echoes',
    'fminEs': 'Minimum frequency of Es-layer',
    'foF2p': 'foF2 prediction by IRI no-storm option',
}
