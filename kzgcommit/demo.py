"""End to end run of the commitment scheme.

    python -m kzgcommit.demo --max-degree 8 --degree 4

With ``--seed`` the trapdoor is derived from the seed so runs are
reproducible; that trapdoor is public and the run proves nothing.
"""
import logging
import sys
import time

from kzgcommit.betterpairing import ZR
from kzgcommit.config import KZGConfig
from kzgcommit.poly_commit_kzg import KZGProver, KZGVerifier, insecure_setup, setup


def get_params(config):
    if config.seed is None:
        return insecure_setup(config.max_degree)
    logging.warning("Deriving the trapdoor from seed %d, demo only", config.seed)
    return setup(ZR.random(config.seed) or 1, config.max_degree)


def run(config):
    begin_time = time.time()
    params = get_params(config)
    logging.info("Setup time: %.2f", time.time() - begin_time)

    prover = KZGProver(params)
    verifier = KZGVerifier(params)

    phi = params.polynomials().random(config.degree)
    commitment = prover.commit(phi)
    logging.info("Commitment: %s", commitment)

    x = ZR.random()
    y = phi(x)
    begin_time = time.time()
    witness = prover.create_witness(x, y)
    logging.info("Witness time: %.2f", time.time() - begin_time)

    begin_time = time.time()
    opened = verifier.verify_poly(commitment, prover.open())
    evaluated = verifier.verify_eval(x, y, commitment, witness)
    logging.info("Verification time: %.2f", time.time() - begin_time)
    logging.info("Full opening valid: %s, evaluation proof valid: %s", opened, evaluated)
    return opened and evaluated


def main(argv=None):
    config = KZGConfig.load_config(argv)
    logging.info("Running with %s", config)
    return 0 if run(config) else 1


if __name__ == "__main__":
    sys.exit(main())
