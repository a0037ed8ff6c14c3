"""
Foundation layer: errors, logging, problem and evaluator contracts, numeric kernels.
"""
