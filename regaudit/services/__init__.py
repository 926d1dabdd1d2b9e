from .chain import DetectorChain, create_default_chain


__all__ = ["DetectorChain", "create_default_chain"]
