import random

TIPS = [
    "Use `cf-records sync --dry-run` to see what will be synced",
    "Use `cf-records sync` to sync your records",
    "Use `cf-records sync --domain [url]` to specify the root domain",
    "Use `cf-records sync -f [record_file]` to specify the file to sync",
    "Use `cf-records fmt --check` to check records file",
    "Use `cf-records fmt` to format records file",
    "Use `cf-records fmt --domain [url]` to specify the root domain",
    "Use `cf-records config --gen` to generate a config file",
]


def gen_tip() -> str:
    """Pick a random usage tip."""
    return random.choice(TIPS)
