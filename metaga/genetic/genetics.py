import numpy as np
import metaga.config as config

def crossover(parent1: np.ndarray, parent2: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """
    Performs uniform crossover.
    Every gene comes from either parent with equal probability.
    """
    mask = rng.random(parent1.shape) < 0.5
    return np.where(mask, parent1, parent2)

def mutate(genes: np.ndarray, rng: np.random.Generator, mutation_rate=config.MUT_START,
           mutation_strength=config.MUTATION_STRENGTH) -> np.ndarray:
    """
    Adds Gaussian noise to genes, in place.
    :param mutation_rate: Fraction of genes to mutate (values above 1 mutate everything).
    :param mutation_strength: Standard deviation of noise.
    """
    mask = rng.random(genes.shape) < mutation_rate
    noise = rng.normal(0.0, mutation_strength, genes.shape)

    # Apply noise only where mask is true
    genes += mask * noise
    return genes
