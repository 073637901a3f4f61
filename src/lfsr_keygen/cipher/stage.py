from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import importlib
import pkgutil


@dataclass(frozen=True)
class Config:
    """
    XOR cipher stage config.

    module: cipher mode module name ("text", "binary", "packed")
    module_cfg: instance of that module's Config (or None -> defaults)
    """
    module: str = "text"
    module_cfg: Any = None


def available_modules() -> list[str]:
    """
    Enumerate available cipher modes under cipher/modules.
    """
    pkg = importlib.import_module(f"{__package__}.modules")
    names = [m.name for m in pkgutil.iter_modules(pkg.__path__)]
    return sorted([n for n in names if not n.startswith("_")])


def _import_cipher_module(name: str):
    if not isinstance(name, str) or not name:
        raise ValueError("cfg.module must be a non-empty string")
    if name.startswith("_") or name not in available_modules():
        raise ValueError(f"unknown cipher module '{name}', available: {available_modules()}")
    return importlib.import_module(f"{__package__}.modules.{name}")


def _resolve_module_and_cfg(cfg: Config):
    mod = _import_cipher_module(cfg.module)

    if not hasattr(mod, "Config"):
        raise AttributeError(f"cipher module '{cfg.module}' missing Config")
    if not hasattr(mod, "tx") or not hasattr(mod, "rx"):
        raise AttributeError(f"cipher module '{cfg.module}' missing tx/rx")

    module_cfg = cfg.module_cfg if cfg.module_cfg is not None else mod.Config()
    return mod, module_cfg


def encrypt(message: Any, keystream: Any, *, cfg: Config = Config()) -> Any:
    """
    output[i] = message[i] XOR keystream[i mod k]
    Raises EmptyKeystream for k == 0; binary mode raises InvalidSymbol.
    """
    mod, module_cfg = _resolve_module_and_cfg(cfg)
    return mod.tx(message, keystream=keystream, cfg=module_cfg)


def decrypt(ciphertext: Any, keystream: Any, *, cfg: Config = Config()) -> Any:
    """
    Inverse of encrypt(). XOR is an involution, but the stage keeps it a
    separate op.
    """
    mod, module_cfg = _resolve_module_and_cfg(cfg)
    return mod.rx(ciphertext, keystream=keystream, cfg=module_cfg)


def decrypt_text(ciphertext: bytes, keystream: Any, *, encoding: str = "utf-8") -> str:
    from lfsr_keygen.cipher.modules.text import Config as TextCfg

    cfg = Config(module="text", module_cfg=TextCfg(encoding=encoding))
    return decrypt(ciphertext, keystream, cfg=cfg).decode(encoding)
