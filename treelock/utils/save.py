import os
import pandas as pd
from datetime import datetime
from typing import List
from treelock.core.types import QueryOutcome


def outcomes_frame(outcomes: List[QueryOutcome]) -> pd.DataFrame:
    return pd.DataFrame({
        "op": [o.query.op.name for o in outcomes],
        "label": [o.query.label for o in outcomes],
        "uid": [o.query.uid for o in outcomes],
        "result": [o.result for o in outcomes],
    })


def save_results(outcomes: List[QueryOutcome], name="queries", folder="results") -> str:
    """
    Save query outcomes to a timestamped CSV.

    Args:
        outcomes (list): processed queries with their result
        name (str): problem name, used as sub-folder
        folder (str): root folder

    Returns:
        str: path of the written file
    """
    os.makedirs(os.path.join(folder, name), exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    df = outcomes_frame(outcomes)
    full_path = os.path.join(folder, name, f"outcomes_{timestamp}.csv")
    df.to_csv(full_path, index=False)
    return full_path
