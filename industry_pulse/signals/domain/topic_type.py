from enum import Enum


class TopicType(str, Enum):
    """
    Closed set of categories a canonical topic can be filed under.
    """
    CARRIER = "carrier"        # Named carriers, carrier financials
    BROKER = "broker"          # Brokers, distribution, program business
    REINSURER = "reinsurer"    # Reinsurance markets, retro, treaty
    LOB = "lob"                # Lines of business (auto, property, GL, cyber, ...)
    PERIL = "peril"            # Catastrophe perils, weather, loss drivers
    REGULATION = "regulation"  # Legislative, regulatory, legal/judicial
    CAPITAL = "capital"        # Capital markets, ILS, ratings, reserves
    MNA = "mna"                # M&A, deals, consolidation
    PEOPLE = "people"          # Leadership changes, talent
    TECHNOLOGY = "technology"  # Insurtech, AI, automation, platforms
