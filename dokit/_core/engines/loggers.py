"""
Logging of the library's activities, with per-resource prefixing.

The transport logs its requests at the debug level only. Waiting for actions
logs via :class:`ResourceLogger`, which carries the references to the resources
(e.g. a volume) and the actions being watched, so that the messages can be
prefixed in the plain-text output or put as separate fields in the JSON output.
"""
import copy
import enum
import logging
from typing import Any, MutableMapping, Optional, Tuple

import pythonjsonlogger.core
import pythonjsonlogger.json

from dokit._cogs.structs import references

DEFAULT_JSON_REFKEY = 'resource'
""" A key for resource references in JSON logs, as seen by the log parsers. """


class LogFormat(enum.Enum):
    """ Log formats, as specified on CLI. """
    PLAIN = '%(message)s'
    FULL = '[%(asctime)s] %(name)-20.20s [%(levelname)-8.8s] %(message)s'
    JSON = 'json'


class ResourceFormatter(logging.Formatter):
    pass


class ResourceTextFormatter(ResourceFormatter, logging.Formatter):
    pass


class ResourceJsonFormatter(ResourceFormatter, pythonjsonlogger.json.JsonFormatter):
    def __init__(
            self,
            *args: Any,
            refkey: Optional[str] = None,
            **kwargs: Any,
    ) -> None:
        # Avoid type checking, as the args are not in the parent consructor.
        reserved_attrs = kwargs.pop('reserved_attrs', pythonjsonlogger.core.RESERVED_ATTRS)
        reserved_attrs = set(reserved_attrs)
        reserved_attrs |= {'do_ref'}
        kwargs.update(reserved_attrs=reserved_attrs)
        kwargs.setdefault('timestamp', True)
        super().__init__(*args, **kwargs)
        self._refkey: str = refkey or DEFAULT_JSON_REFKEY

    def add_fields(
            self,
            log_record: MutableMapping[str, object],
            record: logging.LogRecord,
            message_dict: MutableMapping[str, object],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        if self._refkey and hasattr(record, 'do_ref'):
            ref = getattr(record, 'do_ref')
            log_record[self._refkey] = ref

        if 'severity' not in log_record:
            log_record['severity'] = (
                "debug" if record.levelno <= logging.DEBUG else
                "info" if record.levelno <= logging.INFO else
                "warn" if record.levelno <= logging.WARNING else
                "error" if record.levelno <= logging.ERROR else
                "fatal")


class ResourcePrefixingMixin(ResourceFormatter):
    def format(self, record: logging.LogRecord) -> str:
        if hasattr(record, 'do_ref'):
            ref = getattr(record, 'do_ref')
            scope = ref.get('scope', '')
            action_id = ref.get('action_id')
            prefix = f"[{scope}#{action_id}]" if action_id is not None else f"[{scope}]"
            record = copy.copy(record)  # shallow
            record.msg = f"{prefix} {record.msg}"
        return super().format(record)


class ResourcePrefixingTextFormatter(ResourcePrefixingMixin, ResourceTextFormatter):
    pass


class ResourcePrefixingJsonFormatter(ResourcePrefixingMixin, ResourceJsonFormatter):
    pass


class ResourceLogger(logging.LoggerAdapter):
    """
    A logger/adapter to carry the resource & action identifiers for formatting.

    Constructed for every waited action. The reference is a plain dict,
    so that it goes to the JSON logs as is.
    """

    def __init__(
            self,
            *,
            scope: references.ActionScope,
            action_id: Optional[int] = None,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(logger if logger is not None else actions_logger, dict(
            do_ref=dict(
                scope=str(scope),
                resource_type=scope.plural,
                resource_id=scope.id,
                action_id=action_id,
            ),
        ))

    def process(
            self,
            msg: str,
            kwargs: MutableMapping[str, Any],
    ) -> Tuple[str, MutableMapping[str, Any]]:
        # Native logging overwrites the message's extra with the adapter's extra.
        # We merge them, so that both message's & adapter's extras are available.
        kwargs["extra"] = dict(self.extra or {}, **kwargs.get('extra', {}))
        return msg, kwargs


actions_logger = logging.getLogger('dokit.actions')


def configure(
        debug: Optional[bool] = None,
        verbose: Optional[bool] = None,
        quiet: Optional[bool] = None,
        log_format: LogFormat = LogFormat.FULL,
        log_prefix: Optional[bool] = None,
        log_refkey: Optional[str] = None,
) -> None:
    log_level = 'DEBUG' if debug or verbose else 'WARNING' if quiet else 'INFO'
    formatter = make_formatter(log_format=log_format, log_prefix=log_prefix, log_refkey=log_refkey)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger = logging.getLogger()
    logger.addHandler(handler)
    logger.setLevel(log_level)

    # Prevent the low-level logging unless in the debug mode. Keep only the library's messages.
    # For no-propagation loggers, add a dummy null handler to prevent printing the messages.
    for name in ['asyncio', 'dokit.clients']:
        logger = logging.getLogger(name)
        logger.propagate = bool(debug)
        if not debug:
            logger.handlers[:] = [logging.NullHandler()]


def make_formatter(
        log_format: LogFormat = LogFormat.FULL,
        log_prefix: Optional[bool] = None,
        log_refkey: Optional[str] = None,
) -> ResourceFormatter:
    log_prefix = log_prefix if log_prefix is not None else bool(log_format is not LogFormat.JSON)
    if log_format is LogFormat.JSON:
        if log_prefix:
            return ResourcePrefixingJsonFormatter(refkey=log_refkey)
        else:
            return ResourceJsonFormatter(refkey=log_refkey)
    elif isinstance(log_format, LogFormat):
        if log_prefix:
            return ResourcePrefixingTextFormatter(log_format.value)
        else:
            return ResourceTextFormatter(log_format.value)
    elif isinstance(log_format, str):
        if log_prefix:
            return ResourcePrefixingTextFormatter(log_format)
        else:
            return ResourceTextFormatter(log_format)
    else:
        raise ValueError(f"Unsupported log format: {log_format!r}")
