import matplotlib

# headless backend for the plotting tests
matplotlib.use("Agg")
