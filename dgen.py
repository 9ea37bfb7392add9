'''
.------..------..------..------.
|d.--. ||g.--. ||e.--. ||n.--. |
| :/\: || :/\: || (\/) || :(): |
| (__) || :\/: || :\/: || ()() |
| '--'d|| '--'g|| '--'e|| '--'n|
`------'`------'`------'`------'

seeded record generation for tests. a schema describes one record; the
provider turns it into an infinite, lazily generated yieldq query.

schema forms:
  'word'                               -> faker provider called with no arguments
  ('pyint', {'min_value': 1})          -> faker provider called with keyword arguments
  {'_qen_provider': 'choice', 'from': [...]}  -> uniform choice (numpy rng)
  {'_qen_provider': 'sequence', 'start': 1}   -> 1, 2, 3, ... across records
  {'_qen_provider': 'literal', 'value': x}    -> x
  {'key': schema, ...}                 -> nested record
'''

import itertools
import numpy as np
from faker import Faker
from typing import Any, Dict, Optional
from yieldq import Query, generate


class RecordGenerator:
    """interprets a schema into one record per create() call."""

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
        self._rng = np.random.default_rng(seed)
        self._counters: Dict[int, Any] = {}

    def _faker(self, name: str, kwargs: Optional[Dict] = None) -> Any:
        method = getattr(self._fake, name, None)
        if method is None:
            raise ValueError(f"faker has no provider '{name}'")
        return method(**(kwargs or {}))

    def _provider(self, config: Dict) -> Any:
        provider = config['_qen_provider']
        if provider == 'choice':
            options = config['from']
            return options[int(self._rng.integers(0, len(options)))]
        if provider == 'sequence':
            counter = self._counters.setdefault(id(config), itertools.count(config.get('start', 0)))
            return next(counter)
        if provider == 'literal':
            if 'value' not in config:
                raise ValueError("_qen_provider 'literal' requires a 'value' key.")
            return config['value']
        raise ValueError(f"unknown _qen_provider: '{provider}'")

    def create(self, schema: Any) -> Any:
        if isinstance(schema, dict):
            if '_qen_provider' in schema:
                return self._provider(schema)
            return {key: self.create(value) for key, value in schema.items()}
        if isinstance(schema, tuple) and len(schema) == 2 and isinstance(schema[1], dict):
            return self._faker(schema[0], schema[1])
        if isinstance(schema, str) and hasattr(self._fake, schema):
            return self._faker(schema)
        return schema


class _SchemaProvider:
    def __init__(self, schema: Any, seed: Optional[int] = None):
        self._schema = schema
        self._generator = RecordGenerator(seed)

    def stream(self) -> Query:
        """an infinite query of generated records"""
        return generate(lambda: self._generator.create(self._schema))

    def take(self, count: int) -> Query:
        """a finite query of count generated records"""
        return self.stream().limit(count)


def from_schema(schema: Any, seed: Optional[int] = None) -> _SchemaProvider:
    return _SchemaProvider(schema, seed)
