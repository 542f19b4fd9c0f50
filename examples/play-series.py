import pyarrow.compute as pc

from numframe import ExecPolicy, Series

s = Series(range(20), dtype="float64", policy=ExecPolicy.PAR_UNSEQ, chunk_size=4)
s.set_null(3)
s.set_null(15)

print(s)
print("valid:", s.valid_count(), "null:", s.null_count())
print("sum:", s.sum(), "mean:", s.mean(), "stddev:", s.stddev())

scaled = (s - s.mean()) / s.stddev()
print(scaled)

print(s.copy().mul(0.5).exp().log())
print(s.map(pc.sqrt))
