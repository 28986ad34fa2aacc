import logging
import sys
from typing import Iterable

logger = logging.getLogger(__name__)

#: Audit events raised while combining massif files: ``open`` for each input and the
#: output file, ``glob.glob`` for each input file pattern, and ``os.remove`` for each
#: input deleted with ``--delete``
MASSIF_AUDIT_EVENTS = ("open", "glob.glob", "os.remove")


def enable_python_audit_log(
    event_prefixes: Iterable[str] = MASSIF_AUDIT_EVENTS,
) -> None:
    """
    Log the file system activity of a combine run. This adds a new audit hook,
    :meth:`sys.addaudithook`, that logs each matching event and its first argument,
    the file or pattern it acts on, at debug level. Events are matched by prefix, so
    ``"os."`` would log every :mod:`os` event.

    :param event_prefixes: list of event prefixes to filter on
    """
    prefixes = tuple(event_prefixes)

    def massif_combine_audit_event(event: str, args: tuple) -> None:
        if event.startswith(prefixes):
            target = args[0] if args else None
            logger.debug("%s: %s", event, target)

    sys.addaudithook(massif_combine_audit_event)
