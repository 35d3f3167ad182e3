from rowframe import DataFrame, concat
from rowframe.config import enable_logging

enable_logging("DEBUG")

shops = DataFrame([
    {"City": "Rome", "Shop Name": "Shop 1", "Employees": 10},
    {"City": "Rome", "Shop Name": "Shop 4", "Employees": 4},
    {"City": "Milan", "Shop Name": "Shop 2", "Employees": 7},
    {"City": "Turin", "Shop Name": "Shop 3", "Employees": None},
])
cities = DataFrame([["Rome", "Lazio"], ["Milan", "Lombardy"]], columns=["City", "Region"])

df = shops \
  .filter(lambda row: row["City"] != "Turin") \
  .merge(cities, on="City", how="left") \
  .groupby(["Region", "City"]) \
  .sum()
print(df.to_records())

more_shops = DataFrame([["Naples", "Shop 5", 3]], columns=["City", "Shop Name", "Employees"])
everything = concat([shops, more_shops])
print(everything.sort_values("Employees", descending=True).head(3).to_list())
print(everything.describe().to_records())
