from numframe import DataFrame, Series

df = DataFrame()
df.add("shop", Series([1, 2, 3, 4, 5, 6], dtype="int32"))
df.add("sales", Series([120.5, 99.0, None, 140.25, 80.0, 101.0]))
df.add("visits", Series([30, 25, 12, None, 20, 28]))

print(df)

sales = df.column("sales", float)
visits = df.column("visits", int)
print("sales per visit:", sales / visits)
print("average sales:", sales.mean())
