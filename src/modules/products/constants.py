"""Stored procedure contract for the Produto table.

Names are fixed by the database; the API never exposes them.
"""

from __future__ import annotations

# Procedures
PROC_FETCH_BY_CODE = "SpSe1Produto"
PROC_SEARCH_BY_DESCRIPTION = "SpSeProduto"
PROC_UPSERT = "SpGrProduto"
PROC_DELETE = "SpExProduto"

# Parameters / result columns
COL_CODE = "CodProd"
COL_DESCRIPTION = "DescrProd"

DESCRIPTION_MAX_LENGTH = 80

# SQL LIKE wildcard matching every description.
MATCH_ALL = "%"

# Generated codes
CODE_MIN = 1000
CODE_MAX = 999999
MAX_CODE_ATTEMPTS = 10
