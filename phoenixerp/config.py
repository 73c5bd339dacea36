"""Server configuration, AES-CTR helpers and session tokens."""

from __future__ import annotations

import base64
import binascii
import hashlib
import json
import logging
import math
import random
import time
from dataclasses import dataclass, field
from pathlib import Path

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.json"

_LEVELS = {
    "panic": logging.CRITICAL,
    "fatal": logging.CRITICAL,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}

_JSON_FIELDS = {
    "level": "level",
    "aesKey": "aes_key",
    "aesIv": "aes_iv",
    "host": "host",
    "port": "port",
    "dbDriver": "db_driver",
    "dbDataSource": "db_data_source",
}


def _parse_level(name: str) -> int:
    try:
        return _LEVELS[name.lower()]
    except KeyError:
        raise ValueError(f"not a valid log level: {name!r}") from None


def _unhex(text: str) -> bytes:
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid hex string {text!r}: {exc}") from None


@dataclass
class Config:
    """Settings read from ``config.json``; the AES key and IV are hex strings."""

    level: str
    aes_key: str
    aes_iv: str
    host: str = ""
    port: str = ""
    db_driver: str = ""
    db_data_source: str = ""
    directory: str = ""
    log_level: int = field(init=False)
    rand: random.Random = field(init=False, repr=False, compare=False)
    _key: bytes = field(init=False, repr=False)
    _iv: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.log_level = _parse_level(self.level)
        key = _unhex(self.aes_key)
        if len(key) not in (16, 24, 32):
            raise ValueError(f"invalid AES key size {len(key)}")
        iv = _unhex(self.aes_iv)
        if len(iv) != 16:
            raise ValueError(f"invalid AES IV size {len(iv)}")
        self._key, self._iv = key, iv
        self.rand = random.Random(time.time_ns())

    def aes_stream(self, data: bytes) -> bytes:
        """XOR ``data`` with the AES-CTR key stream; applying it twice restores the input."""
        encryptor = Cipher(algorithms.AES(self._key), modes.CTR(self._iv)).encryptor()
        return encryptor.update(data) + encryptor.finalize()

    def aes_encode_string(self, src: str) -> str:
        """Encrypt ``src`` and return it hex encoded."""
        return self.aes_stream(src.encode("utf-8")).hex()

    def aes_decode_string(self, dst: str) -> str:
        """Decrypt a hex string produced by :meth:`aes_encode_string`."""
        return self.aes_stream(_unhex(dst)).decode("utf-8", errors="replace")


def load_config(directory: str | Path) -> Config:
    """Read ``config.json`` from ``directory`` and apply its log level."""
    raw = json.loads((Path(directory) / CONFIG_FILE).read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"{CONFIG_FILE} must hold a JSON object")

    settings: dict[str, str] = {}
    for json_name, attribute in _JSON_FIELDS.items():
        value = raw.get(json_name, "")
        if not isinstance(value, str):
            raise ValueError(f"config field {json_name!r} must be a string")
        settings[attribute] = value

    config = Config(directory=str(directory), **settings)

    logging.getLogger(__name__.partition(".")[0]).setLevel(config.log_level)
    logger.info("AES key: %r", config.aes_key)
    logger.info("AES IV: %r", config.aes_iv)
    logger.info("Log level: %r", config.level)
    logger.info("Working directory: %r", config.directory)
    logger.info("Database driver: %r", config.db_driver)
    logger.info("Database data source: %r", config.db_data_source)
    return config


def generate_token(
    config: Config,
    user_id: str,
    user_code: str,
    user_name: str,
    depart_id: str,
    depart_code: str,
    depart_name: str,
    password: str,
    user_agent: str,
    expire: int,
) -> str:
    """Build an encrypted session token valid for ``expire`` seconds."""
    extra = "_".join(
        (user_agent, password, user_code, user_name, depart_id, depart_code, depart_name)
    )
    digest = base64.b64encode(hashlib.md5(extra.encode("utf-8")).digest()).decode("ascii")
    expires_at = math.floor(time.time() + expire)
    plain = ",".join((user_id, digest, str(expires_at)))
    return base64.b64encode(config.aes_stream(plain.encode("utf-8"))).decode("ascii")