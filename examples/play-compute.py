from rowframe import DataFrame
from rowframe.compute import AggregateNode, FilterNode, JoinNode, TableSource

shops = DataFrame(
    [["Rome", "Shop 1", 10], ["Rome", "Shop 4", 4], ["Milan", "Shop 2", 7]],
    columns=["City", "Shop Name", "Employees"],
)
cities = DataFrame([["Rome", "Lazio"], ["Milan", "Lombardy"]], columns=["City", "Region"])

query = AggregateNode(
    ["Region"],
    "mean",
    JoinNode(
        "City",
        "inner",
        None,
        FilterNode(lambda row: row["Employees"] > 5, TableSource(shops)),
        TableSource(cities),
    ),
)
print(query)
print("---")
print(query.execute().to_records())
