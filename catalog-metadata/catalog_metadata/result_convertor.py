# (C) 2022 GoodData Corporation
from typing import Iterable, Optional

import pandas


def metadata_rows_to_dataframe(rows: Iterable[tuple], row_type: type, index: Optional[str] = None) -> pandas.DataFrame:
    """
    Converts rows of a metadata result to a pandas dataframe with one column per field of the row type. The
    columns are named after the fields; an empty result still produces a dataframe with all the columns.

    :param rows: rows of a metadata result, e.g. the list returned by get_columns()
    :param row_type: namedtuple type of the rows, e.g. MetadataColumnRow
    :param index: optionally specify name of field to use as the index of the dataframe
    :return: a new dataframe
    """
    df = pandas.DataFrame.from_records(list(rows), columns=list(row_type._fields))

    if index is not None:
        return df.set_index(index)

    return df
