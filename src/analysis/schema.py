"""
Phillips Curve Table Schemas
Column contracts between pipeline stages
"""

# --- Rate Calculator input (normalized primary source, one row per date) ---
RATE_INPUT_SCHEMA = {
    "date": "datetime64[ns]",
    "cpi": float,                       # Consumer price index level
    "unemp_level": float,               # Unemployed persons (thousands)
    "civ_labor_force": float,           # Civilian labor force (thousands)
}

# --- PhillipsCurveTable ---
PHILLIPS_SCHEMA = {
    "date": "datetime64[ns]",
    "inflation": float,                 # Percent change vs. preceding row
    "u3": float,                        # Unemployment rate, percent
}

# --- Auxiliary series ---
NROU_SCHEMA = {
    "date": "datetime64[ns]",
    "nrou": float,                      # Natural rate of unemployment, percent
}

U6_SCHEMA = {
    "date": "datetime64[ns]",
    "u6": float,                        # Broad unemployment rate, percent
}

# --- Expected-inflation input (PhillipsCurveTable ⋈ NROU) ---
EXPECTATION_SCHEMA = {**PHILLIPS_SCHEMA, **NROU_SCHEMA}
