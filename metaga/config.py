# Global Genetic Algorithm & Meta-Training Configuration

# Generation Engine Starting Values
POP_START = 25               # Individuals in a fresh population
MUT_START = 0.5              # Mutation rate
ELITE_KEEP_START = 1.0       # Best individuals kept without mutation
DEATH_START = 20.0           # Worst individuals killed each generation
CHILD_PER_COUPLE_START = 4.0 # Children per survivor

# Population Bounds
MIN_SURVIVORS = 2
MIN_CHILDREN = 4
MAX_CHILDREN = 200
MAX_POPULATION = 204

# Solution Mutation
MUTATION_STRENGTH = 0.15     # Std dev of the gaussian noise added to a mutated gene

# Engine as an Environment
HISTORY_SIZE = 5             # Rolling max/median slots
GEN_RESULT_SIZE = 15         # 5 stats + 5 max history + 5 median history
PARAM_CHOICE_SIZE = 5        # global, mutation, elite, kills, birth rate
MAX_STEPS = 20               # Generations per playout
SOLVED_AFTER = 150           # Individuals evaluated before a playout ends

# Policy Network
HIDDEN_SIZES = (40, 10)

# Meta-Training Hyperparameters
TEST_DATA_SIZE = 1000
NB_EXAMPLE_PROBLEMS = 100
TESTS_PER_PROBLEM = 50
MAX_GEN = 2                  # Fit iterations per training round
STARTING_COEF = 1.0
COEF_MODIFICATOR = 0.95
PERCENT_ELITE = 0.05
PROB_CONF_SIZE = 100
FIXED_PARAM_GENERATIONS = 10
SCORE_SCALE = 1_000_000.0    # Divides printed scores

# Network Fitting
FIT_EPOCHS_PER_ITER = 20     # Gradient epochs inside one fit iteration
FIT_LEARNING_RATE = 0.01
FIT_TARGET_LOSS = 0.05
FIT_BATCH_DIVISOR = 200
