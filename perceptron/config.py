class Config:

    # =====================
    # Network
    # =====================
    network_shape = [2, 3, 1]
    activation = "tanh"
    output_activation = "sigmoid"
    regularization = "l2"

    # Bias given to every node at construction
    bias = 0.1

    # Seed for initial link weights (None draws from the global generator)
    seed = 42

    # Check input lengths on every forward pass
    validate = True

    # =====================
    # Walkthrough
    # =====================
    error_function = "meanSquaredError"

    # Cross-check accumulated derivatives against torch autograd after a run
    gradient_check = True
    gradient_tolerance = 1e-8

    # XOR
    inputs = [
        [0.0, 0.0],
        [0.0, 1.0],
        [1.0, 0.0],
        [1.0, 1.0],
    ]
    targets = [0.0, 1.0, 1.0, 0.0]

    # =====================
    # Output
    # =====================
    log_path = "out/walkthrough.log"
    stats_path = "out/passes.csv"
    figure_path = "out/network.png"
