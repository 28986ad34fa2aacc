import os

from dotenv import load_dotenv

__all__ = (
    "DEFAULT_OUTPUT_FILENAME",
    "MASSIF_COMBINE_DEBUG",
    "MASSIF_COMBINE_DEBUG_ENV",
    "MASSIF_COMBINE_OUTPUT",
    "MASSIF_COMBINE_OUTPUT_ENV",
)

#: The output filename used when neither the command line nor the environment
#: provides one
DEFAULT_OUTPUT_FILENAME = "massif.out.combine"


def _load_env() -> None:
    """
    Load massif_combine environment variables from the ``.env`` file, if one exists in
    the current working directory. None of the variables are required.

    This method is called automatically on first import.
    """
    load_dotenv(".env", override=True)


_load_env()

#: The environment variable name for the MASSIF_COMBINE_OUTPUT value
MASSIF_COMBINE_OUTPUT_ENV = "MASSIF_COMBINE_OUTPUT"
#: The default combined massif output filename
MASSIF_COMBINE_OUTPUT = (
    os.environ.get(MASSIF_COMBINE_OUTPUT_ENV) or DEFAULT_OUTPUT_FILENAME
)
#: The environment variable name for the MASSIF_COMBINE_DEBUG value
MASSIF_COMBINE_DEBUG_ENV = "MASSIF_COMBINE_DEBUG"
#: massif_combine is running in debug mode
MASSIF_COMBINE_DEBUG = os.environ.get(MASSIF_COMBINE_DEBUG_ENV) == "1"
