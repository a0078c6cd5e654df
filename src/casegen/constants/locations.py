"""
Multi-region location catalog (52 sites: 25 US, 15 EMEA, 12 APAC).

One headquarters per region. Street addresses are filled in by Faker at
generation time; everything here is fixed reference data.
"""

LOCATIONS: list[dict] = [
    # US (25)
    {"code": "NYC-HQ", "name": "New York Headquarters", "city": "New York", "country": "US", "region": "US", "timezone": "America/New_York", "is_headquarters": True},
    {"code": "CHI-01", "name": "Chicago Distribution Center", "city": "Chicago", "country": "US", "region": "US", "timezone": "America/Chicago", "is_headquarters": False},
    {"code": "LAX-01", "name": "Los Angeles Office", "city": "Los Angeles", "country": "US", "region": "US", "timezone": "America/Los_Angeles", "is_headquarters": False},
    {"code": "SFO-01", "name": "San Francisco Technology Center", "city": "San Francisco", "country": "US", "region": "US", "timezone": "America/Los_Angeles", "is_headquarters": False},
    {"code": "BOS-01", "name": "Boston Medical Campus", "city": "Boston", "country": "US", "region": "US", "timezone": "America/New_York", "is_headquarters": False},
    {"code": "DFW-01", "name": "Dallas Regional Office", "city": "Dallas", "country": "US", "region": "US", "timezone": "America/Chicago", "is_headquarters": False},
    {"code": "IAH-01", "name": "Houston Energy Center", "city": "Houston", "country": "US", "region": "US", "timezone": "America/Chicago", "is_headquarters": False},
    {"code": "MIA-01", "name": "Miami Office", "city": "Miami", "country": "US", "region": "US", "timezone": "America/New_York", "is_headquarters": False},
    {"code": "ATL-01", "name": "Atlanta Service Center", "city": "Atlanta", "country": "US", "region": "US", "timezone": "America/New_York", "is_headquarters": False},
    {"code": "SEA-01", "name": "Seattle Cloud Campus", "city": "Seattle", "country": "US", "region": "US", "timezone": "America/Los_Angeles", "is_headquarters": False},
    {"code": "DEN-01", "name": "Denver Office", "city": "Denver", "country": "US", "region": "US", "timezone": "America/Denver", "is_headquarters": False},
    {"code": "PHX-01", "name": "Phoenix Operations Center", "city": "Phoenix", "country": "US", "region": "US", "timezone": "America/Phoenix", "is_headquarters": False},
    {"code": "PHL-01", "name": "Philadelphia Hospital Group", "city": "Philadelphia", "country": "US", "region": "US", "timezone": "America/New_York", "is_headquarters": False},
    {"code": "MSP-01", "name": "Minneapolis Device Plant", "city": "Minneapolis", "country": "US", "region": "US", "timezone": "America/Chicago", "is_headquarters": False},
    {"code": "DTW-01", "name": "Detroit Manufacturing Plant", "city": "Detroit", "country": "US", "region": "US", "timezone": "America/Detroit", "is_headquarters": False},
    {"code": "CLT-01", "name": "Charlotte Shared Services", "city": "Charlotte", "country": "US", "region": "US", "timezone": "America/New_York", "is_headquarters": False},
    {"code": "BNA-01", "name": "Nashville Clinical Center", "city": "Nashville", "country": "US", "region": "US", "timezone": "America/Chicago", "is_headquarters": False},
    {"code": "SAN-01", "name": "San Diego Research Lab", "city": "San Diego", "country": "US", "region": "US", "timezone": "America/Los_Angeles", "is_headquarters": False},
    {"code": "PDX-01", "name": "Portland Fulfillment Center", "city": "Portland", "country": "US", "region": "US", "timezone": "America/Los_Angeles", "is_headquarters": False},
    {"code": "AUS-01", "name": "Austin Software Studio", "city": "Austin", "country": "US", "region": "US", "timezone": "America/Chicago", "is_headquarters": False},
    {"code": "RDU-01", "name": "Raleigh Pharma Campus", "city": "Raleigh", "country": "US", "region": "US", "timezone": "America/New_York", "is_headquarters": False},
    {"code": "TPA-01", "name": "Tampa Retail Hub", "city": "Tampa", "country": "US", "region": "US", "timezone": "America/New_York", "is_headquarters": False},
    {"code": "IND-01", "name": "Indianapolis Warehouse", "city": "Indianapolis", "country": "US", "region": "US", "timezone": "America/Indiana/Indianapolis", "is_headquarters": False},
    {"code": "CMH-01", "name": "Columbus Office", "city": "Columbus", "country": "US", "region": "US", "timezone": "America/New_York", "is_headquarters": False},
    {"code": "STL-01", "name": "St. Louis Refinery Office", "city": "St. Louis", "country": "US", "region": "US", "timezone": "America/Chicago", "is_headquarters": False},
    # EMEA (15)
    {"code": "LON-HQ", "name": "London EMEA Headquarters", "city": "London", "country": "GB", "region": "EMEA", "timezone": "Europe/London", "is_headquarters": True},
    {"code": "FRA-01", "name": "Frankfurt Office", "city": "Frankfurt", "country": "DE", "region": "EMEA", "timezone": "Europe/Berlin", "is_headquarters": False},
    {"code": "PAR-01", "name": "Paris Office", "city": "Paris", "country": "FR", "region": "EMEA", "timezone": "Europe/Paris", "is_headquarters": False},
    {"code": "AMS-01", "name": "Amsterdam Logistics Hub", "city": "Amsterdam", "country": "NL", "region": "EMEA", "timezone": "Europe/Amsterdam", "is_headquarters": False},
    {"code": "MAD-01", "name": "Madrid Office", "city": "Madrid", "country": "ES", "region": "EMEA", "timezone": "Europe/Madrid", "is_headquarters": False},
    {"code": "MIL-01", "name": "Milan Office", "city": "Milan", "country": "IT", "region": "EMEA", "timezone": "Europe/Rome", "is_headquarters": False},
    {"code": "DUB-01", "name": "Dublin Technology Center", "city": "Dublin", "country": "IE", "region": "EMEA", "timezone": "Europe/Dublin", "is_headquarters": False},
    {"code": "MUC-01", "name": "Munich Device Engineering", "city": "Munich", "country": "DE", "region": "EMEA", "timezone": "Europe/Berlin", "is_headquarters": False},
    {"code": "ZRH-01", "name": "Zurich Pharma Office", "city": "Zurich", "country": "CH", "region": "EMEA", "timezone": "Europe/Zurich", "is_headquarters": False},
    {"code": "STO-01", "name": "Stockholm Office", "city": "Stockholm", "country": "SE", "region": "EMEA", "timezone": "Europe/Stockholm", "is_headquarters": False},
    {"code": "CPH-01", "name": "Copenhagen Wind Office", "city": "Copenhagen", "country": "DK", "region": "EMEA", "timezone": "Europe/Copenhagen", "is_headquarters": False},
    {"code": "BRU-01", "name": "Brussels Regulatory Office", "city": "Brussels", "country": "BE", "region": "EMEA", "timezone": "Europe/Brussels", "is_headquarters": False},
    {"code": "VIE-01", "name": "Vienna Office", "city": "Vienna", "country": "AT", "region": "EMEA", "timezone": "Europe/Vienna", "is_headquarters": False},
    {"code": "PRG-01", "name": "Prague Shared Services", "city": "Prague", "country": "CZ", "region": "EMEA", "timezone": "Europe/Prague", "is_headquarters": False},
    {"code": "WAW-01", "name": "Warsaw Development Center", "city": "Warsaw", "country": "PL", "region": "EMEA", "timezone": "Europe/Warsaw", "is_headquarters": False},
    # APAC (12)
    {"code": "TYO-HQ", "name": "Tokyo APAC Headquarters", "city": "Tokyo", "country": "JP", "region": "APAC", "timezone": "Asia/Tokyo", "is_headquarters": True},
    {"code": "SIN-01", "name": "Singapore Office", "city": "Singapore", "country": "SG", "region": "APAC", "timezone": "Asia/Singapore", "is_headquarters": False},
    {"code": "SYD-01", "name": "Sydney Office", "city": "Sydney", "country": "AU", "region": "APAC", "timezone": "Australia/Sydney", "is_headquarters": False},
    {"code": "MEL-01", "name": "Melbourne Clinical Office", "city": "Melbourne", "country": "AU", "region": "APAC", "timezone": "Australia/Melbourne", "is_headquarters": False},
    {"code": "SHA-01", "name": "Shanghai Manufacturing Plant", "city": "Shanghai", "country": "CN", "region": "APAC", "timezone": "Asia/Shanghai", "is_headquarters": False},
    {"code": "BJS-01", "name": "Beijing Office", "city": "Beijing", "country": "CN", "region": "APAC", "timezone": "Asia/Shanghai", "is_headquarters": False},
    {"code": "HKG-01", "name": "Hong Kong Office", "city": "Hong Kong", "country": "HK", "region": "APAC", "timezone": "Asia/Hong_Kong", "is_headquarters": False},
    {"code": "ICN-01", "name": "Seoul Office", "city": "Seoul", "country": "KR", "region": "APAC", "timezone": "Asia/Seoul", "is_headquarters": False},
    {"code": "BLR-01", "name": "Bangalore Engineering Center", "city": "Bangalore", "country": "IN", "region": "APAC", "timezone": "Asia/Kolkata", "is_headquarters": False},
    {"code": "BOM-01", "name": "Mumbai Office", "city": "Mumbai", "country": "IN", "region": "APAC", "timezone": "Asia/Kolkata", "is_headquarters": False},
    {"code": "MNL-01", "name": "Manila Service Center", "city": "Manila", "country": "PH", "region": "APAC", "timezone": "Asia/Manila", "is_headquarters": False},
    {"code": "AKL-01", "name": "Auckland Office", "city": "Auckland", "country": "NZ", "region": "APAC", "timezone": "Pacific/Auckland", "is_headquarters": False},
]

# Location region -> reporting region used by the intake timestamp model
REGION_TO_REPORTING_REGION: dict[str, str] = {
    "US": "AMERICAS",
    "EMEA": "EMEA",
    "APAC": "APAC",
}
