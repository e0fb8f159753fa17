import numpy as np
import pandas as pd
from pathlib import Path

n_proteins = 2000
cell_lines = ["A549", "HELA", "MCF7", "HEK293", "U2OS", "K562"]

rng = np.random.default_rng(0)

# log-normal copy numbers, ~10% missing per cell line
copies = rng.lognormal(mean=11.0, sigma=2.0, size=(n_proteins, len(cell_lines)))
copies[rng.random(copies.shape) < 0.1] = np.nan

df = pd.DataFrame(
    {
        "T: Protein.Group": [f"P{i:05d};Q{i:05d}" for i in range(n_proteins)],
        "T: Gene Names": [f"GENE{i};ALIAS{i}" for i in range(n_proteins)],
        "T: Protein names": [f"Mock protein {i}" for i in range(n_proteins)],
        "C: Histones": np.where(rng.random(n_proteins) < 0.02, "+", ""),
        "N: Mass": rng.uniform(10_000, 250_000, size=n_proteins).round(0),
    }
)
for j, cl in enumerate(cell_lines):
    df[f"N: Copy number {cl}.raw"] = copies[:, j]

Path("data").mkdir(exist_ok=True)
df.to_csv("data/mock_copy_numbers.csv", index=False)
print("wrote data/mock_copy_numbers.csv", df.shape)
