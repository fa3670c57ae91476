"""
Backend registry and selection
"""
from typing import Any, Callable, Dict, List, Optional

from ner_providers.base import FinderLoadResult, PersonSpanFinder
from ner_providers.exceptions import classify_error
from logger import get_logger
from config import settings

logger = get_logger(__name__)


def _spacy_factory(config: Dict[str, Any]) -> PersonSpanFinder:
    from ner_providers.spacy_local import SpacyPersonFinder
    return SpacyPersonFinder(config)


def _transformers_factory(config: Dict[str, Any]) -> PersonSpanFinder:
    from ner_providers.huggingface_local import TransformersPersonFinder
    return TransformersPersonFinder(config)


class BackendRegistry:
    """Registry of NER backend factories.

    Factories import their engine lazily so a missing library only makes
    that backend unavailable.
    """

    def __init__(self):
        self._factories: Dict[str, Callable[[Dict[str, Any]], PersonSpanFinder]] = {}
        self._register_builtin_backends()

    def _register_builtin_backends(self):
        self.register("spacy", _spacy_factory)
        self.register("transformers", _transformers_factory)

    def register(self, name: str, factory: Callable[[Dict[str, Any]], PersonSpanFinder]):
        """Register a backend factory taking a config dict"""
        self._factories[name] = factory
        logger.debug(f"Registered NER backend: {name}")

    def list_backends(self) -> List[str]:
        return list(self._factories.keys())

    def load(self, backends: Optional[List[str]] = None,
             configs: Optional[Dict[str, Dict[str, Any]]] = None) -> FinderLoadResult:
        """Try backends in order and return the first that loads.

        Never raises: if nothing loads the result is unavailable and carries
        the reason per backend.
        """
        if backends is None:
            backends = settings.get('ner_backends', ["spacy", "transformers"])
        configs = configs or {}
        result = FinderLoadResult()

        for name in backends:
            factory = self._factories.get(name)
            if factory is None:
                result.errors[name] = "backend not registered"
                logger.warning(f"NER backend '{name}' not registered")
                continue

            try:
                finder = factory(configs.get(name, {}))
                load = getattr(finder, "load", None)
                if load is not None:
                    load()
            except Exception as e:
                error = classify_error(e, provider_name=name)
                result.errors[name] = str(error)
                logger.warning(f"NER backend unavailable: {error}")
                continue

            result.finder = finder
            result.backend = name
            logger.info(f"Using NER backend: {name}")
            return result

        logger.warning("No NER backend available, names will come from cue patterns")
        return result


# Global registry instance
_registry = None

def get_registry() -> BackendRegistry:
    """Get the global backend registry"""
    global _registry
    if _registry is None:
        _registry = BackendRegistry()
    return _registry


def load_person_finder(backends: Optional[List[str]] = None,
                       configs: Optional[Dict[str, Dict[str, Any]]] = None) -> FinderLoadResult:
    return get_registry().load(backends, configs)
