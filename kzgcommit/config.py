"""
Module for ``kzgcommit``'s configuration.

This module can be used to:

* define default configuration settings
* load a configuration from a JSON file and command line overrides
* validate a configuration

Sample config::

    {"max_degree": 16, "degree": 5, "seed": 42}
"""

from argparse import ArgumentParser
import json

from kzgcommit.exceptions import ConfigurationError


class ConfigVars(object):
    MaxDegree = "max_degree"
    Degree = "degree"
    Seed = "seed"


class KZGConfig(object):
    def __init__(self, max_degree, degree, seed):
        self.max_degree = max_degree
        self.degree = degree
        self.seed = seed

    def __repr__(self):
        return (
            f"KZGConfig(max_degree={self.max_degree}, degree={self.degree}, "
            f"seed={self.seed})"
        )

    @classmethod
    def default(cls):
        return cls(max_degree=10, degree=3, seed=None)

    @classmethod
    def from_json(cls, json_config):
        res = cls.default()
        if ConfigVars.MaxDegree in json_config:
            res.max_degree = json_config[ConfigVars.MaxDegree]
        if ConfigVars.Degree in json_config:
            res.degree = json_config[ConfigVars.Degree]
        if ConfigVars.Seed in json_config:
            res.seed = json_config[ConfigVars.Seed]

        res.validate()
        return res

    def validate(self):
        if type(self.max_degree) is not int or self.max_degree < 1:
            raise ConfigurationError(
                f"max_degree must be a positive integer, got {self.max_degree!r}"
            )
        if type(self.degree) is not int or not 0 <= self.degree < self.max_degree:
            raise ConfigurationError(
                f"degree must be an integer in [0, {self.max_degree}), "
                f"got {self.degree!r}"
            )
        if self.seed is not None and type(self.seed) is not int:
            raise ConfigurationError(f"seed must be an integer, got {self.seed!r}")

    @staticmethod
    def load_config(argv=None):
        parser = ArgumentParser(description="Commits to a polynomial and proves it.")

        parser.add_argument(
            "-f",
            "--config-file",
            type=str,
            dest="config_file_path",
            help="Path from where to load the JSON config file.",
        )
        parser.add_argument(
            "-d",
            "--max-degree",
            type=int,
            dest=ConfigVars.MaxDegree,
            help="Number of coefficients the parameters support.",
        )
        parser.add_argument(
            "--degree",
            type=int,
            dest=ConfigVars.Degree,
            help="Degree of the random polynomial to commit to.",
        )
        parser.add_argument(
            "--seed",
            type=int,
            dest=ConfigVars.Seed,
            help="Derive the trapdoor from this seed. Demo only, never in production.",
        )

        args = parser.parse_args(argv)

        json_config = {}
        if args.config_file_path is not None:
            try:
                with open(args.config_file_path) as f:
                    json_config = json.load(f)
            except (OSError, ValueError) as e:
                raise ConfigurationError(
                    f"Unable to read config file {args.config_file_path}: {e}"
                )
            if not isinstance(json_config, dict):
                raise ConfigurationError("config file must contain a JSON object")

        for key in (ConfigVars.MaxDegree, ConfigVars.Degree, ConfigVars.Seed):
            value = getattr(args, key)
            if value is not None:
                json_config[key] = value

        return KZGConfig.from_json(json_config)
