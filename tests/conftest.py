import os
import sys

# make the modules under src/ importable without installing the project
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src'))
