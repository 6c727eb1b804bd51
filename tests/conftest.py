import os

# Plots are drawn off-screen under test.
os.environ.setdefault('MPLBACKEND', 'Agg')
