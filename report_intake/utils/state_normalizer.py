"""State, province and country name normalization.

Reports spell regions every possible way ("CO", "Colorado", "colorado ").
Blocking keys and location inference need one canonical form per region.
"""

from typing import Optional

# US state name to abbreviation mapping
STATE_NAME_TO_CODE = {
    'alabama': 'AL',
    'alaska': 'AK',
    'arizona': 'AZ',
    'arkansas': 'AR',
    'california': 'CA',
    'colorado': 'CO',
    'connecticut': 'CT',
    'delaware': 'DE',
    'florida': 'FL',
    'georgia': 'GA',
    'hawaii': 'HI',
    'idaho': 'ID',
    'illinois': 'IL',
    'indiana': 'IN',
    'iowa': 'IA',
    'kansas': 'KS',
    'kentucky': 'KY',
    'louisiana': 'LA',
    'maine': 'ME',
    'maryland': 'MD',
    'massachusetts': 'MA',
    'michigan': 'MI',
    'minnesota': 'MN',
    'mississippi': 'MS',
    'missouri': 'MO',
    'montana': 'MT',
    'nebraska': 'NE',
    'nevada': 'NV',
    'new hampshire': 'NH',
    'new jersey': 'NJ',
    'new mexico': 'NM',
    'new york': 'NY',
    'north carolina': 'NC',
    'north dakota': 'ND',
    'ohio': 'OH',
    'oklahoma': 'OK',
    'oregon': 'OR',
    'pennsylvania': 'PA',
    'rhode island': 'RI',
    'south carolina': 'SC',
    'south dakota': 'SD',
    'tennessee': 'TN',
    'texas': 'TX',
    'utah': 'UT',
    'vermont': 'VT',
    'virginia': 'VA',
    'washington': 'WA',
    'west virginia': 'WV',
    'wisconsin': 'WI',
    'wyoming': 'WY',
    # Territories
    'district of columbia': 'DC',
    'washington dc': 'DC',
    'washington d.c.': 'DC',
    'puerto rico': 'PR',
    'guam': 'GU',
}

# Canadian province name to abbreviation mapping
PROVINCE_NAME_TO_CODE = {
    'alberta': 'AB',
    'british columbia': 'BC',
    'manitoba': 'MB',
    'new brunswick': 'NB',
    'newfoundland and labrador': 'NL',
    'newfoundland': 'NL',
    'nova scotia': 'NS',
    'ontario': 'ON',
    'prince edward island': 'PE',
    'quebec': 'QC',
    'saskatchewan': 'SK',
    'yukon': 'YT',
    'northwest territories': 'NT',
    'nunavut': 'NU',
}

VALID_STATE_CODES = set(STATE_NAME_TO_CODE.values())
VALID_PROVINCE_CODES = set(PROVINCE_NAME_TO_CODE.values())

# Country spellings seen in scraped data
COUNTRY_ALIASES = {
    'us': 'United States',
    'usa': 'United States',
    'u.s.': 'United States',
    'u.s.a.': 'United States',
    'united states': 'United States',
    'united states of america': 'United States',
    'america': 'United States',
    'uk': 'United Kingdom',
    'u.k.': 'United Kingdom',
    'united kingdom': 'United Kingdom',
    'great britain': 'United Kingdom',
    'england': 'United Kingdom',
    'scotland': 'United Kingdom',
    'wales': 'United Kingdom',
    'ca': 'Canada',
    'canada': 'Canada',
    'au': 'Australia',
    'australia': 'Australia',
}


def normalize_state(state: Optional[str]) -> Optional[str]:
    """
    Normalize a US state or Canadian province to its 2-letter code.

    Args:
        state: State/province name or abbreviation

    Returns:
        2-letter code, the stripped input if it is not recognized, or None if blank
    """
    if not state:
        return None

    state = state.strip()
    if not state:
        return None

    upper = state.upper()
    if upper in VALID_STATE_CODES or upper in VALID_PROVINCE_CODES:
        return upper

    state_lower = state.lower().rstrip('.')
    if state_lower in STATE_NAME_TO_CODE:
        return STATE_NAME_TO_CODE[state_lower]
    if state_lower in PROVINCE_NAME_TO_CODE:
        return PROVINCE_NAME_TO_CODE[state_lower]

    # e.g. "New York State" -> "NY"
    if state_lower.endswith(' state'):
        return STATE_NAME_TO_CODE.get(state_lower[:-len(' state')], state)

    return state


def normalize_country(country: Optional[str]) -> Optional[str]:
    """Canonical country name, the stripped input if unknown, or None if blank."""
    if not country:
        return None
    country = country.strip()
    if not country:
        return None
    return COUNTRY_ALIASES.get(country.lower(), country)


def region_key(state_province: Optional[str], country: Optional[str]) -> Optional[str]:
    """
    Lower-cased region key used to bucket reports: the canonical state or
    province when present, otherwise the canonical country, otherwise None.
    """
    state = normalize_state(state_province)
    if state:
        return state.lower()
    country_name = normalize_country(country)
    if country_name:
        return country_name.lower()
    return None
