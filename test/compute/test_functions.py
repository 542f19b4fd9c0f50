import pyarrow as pa
import pyarrow.compute as pc

from numframe.compute.functions import (
    BoundFunction,
    ReversedFunction,
    signum,
    true_divide,
)


def test_bound_function_right_side():
    func = BoundFunction(pc.add, 1)
    assert func.func == pc.add
    assert func.value == 1
    assert func.reverse is False
    assert func(pa.array([1, 2, 3])).to_pylist() == [2, 3, 4]


def test_bound_function_left_side():
    func = BoundFunction(pc.subtract, 10, reverse=True)
    assert func(pa.array([1, 2, 3])).to_pylist() == [9, 8, 7]


def test_bound_function_on_scalars():
    func = BoundFunction(pc.multiply, 3)
    assert func(pa.scalar(4)).as_py() == 12


def test_bound_function_str():
    assert str(BoundFunction(pc.add, 1)) == "pyarrow.compute.add(x,1)"
    assert str(BoundFunction(pc.subtract, 5, reverse=True)) == "pyarrow.compute.subtract(5,x)"


def test_reversed_function():
    func = ReversedFunction(pc.subtract)
    result = func(pa.array([1, 2]), pa.array([10, 20]))
    assert result.to_pylist() == [9, 18]
    assert str(func) == "pyarrow.compute.subtract(y,x)"


def test_true_divide_integers():
    result = true_divide(pa.array([1, 2, 3]), pa.array([2, 2, 2]))
    assert result.type == pa.float64()
    assert result.to_pylist() == [0.5, 1.0, 1.5]


def test_true_divide_python_scalars():
    assert true_divide(3, pa.array([2])).to_pylist() == [1.5]
    assert true_divide(pa.array([3]), 2).to_pylist() == [1.5]


def test_true_divide_integer_scalar():
    assert true_divide(pa.scalar(1), pa.scalar(4)).as_py() == 0.25


def test_signum():
    assert signum(pa.array([-3, 0, 2])).to_pylist() == [-1, 0, 1]
    assert signum(pa.array([-0.5, 2.5])).to_pylist() == [-1.0, 1.0]
