import pytest

from gf2bench.signature import (
    FunctionSpec,
    UsageError,
    decode_arguments,
    find_function,
    function_names,
    split_input_codes,
)


def test_function_names_order_and_content():
    names = function_names()
    assert names[0] == "_mzd_row_swap"
    assert names[-1] == "nothing"
    assert "mzd_first_zero_row" in names
    assert len(names) == len(set(names))


def test_find_function_returns_table_entry():
    spec = find_function("mzd_transpose")
    assert spec.input_codes == "Onm,Rmn"
    assert spec.complexity_code == "mn"
    assert spec.count == 10000000


def test_find_function_large_count():
    assert find_function("mzd_first_zero_row").count == 10000000000


def test_find_function_unknown_lists_names():
    with pytest.raises(UsageError) as info:
        find_function("no_such_function")
    assert "no_such_function" in info.value.message
    assert "mzd_row_swap" in info.value.usage
    assert info.value.usage.startswith("Possible values for <funcname>:")


def test_every_name_is_found():
    for name in function_names():
        assert find_function(name).name == name


def test_split_input_codes():
    assert split_input_codes("Rmn,ri,ri,wi") == ["Rmn", "ri", "ri", "wi"]
    assert split_input_codes("") == []


def test_decode_row_swap():
    params = decode_arguments(find_function("mzd_row_swap"), ["100", "200", "3", "5"])
    assert (params.m, params.n) == (100, 200)
    assert params.rows == [3, 5]
    assert params.seen_sizes == ["m", "n"]
    assert params.funcname == "mzd_row_swap"


def test_decode_sizes_ordered_m_n_k_l():
    params = decode_arguments(find_function("mzd_concat"), ["1", "2", "3", "4"])
    assert params.seen_sizes == ["m", "n", "k", "l"]
    assert (params.m, params.n, params.k, params.l) == (1, 2, 3, 4)


def test_decode_combine_mixed_indices():
    args = ["64", "128", "1", "0", "2", "3"]
    params = decode_arguments(find_function("mzd_combine"), args)
    assert params.rows == [1, 2, 3]
    assert params.words == [0]


def test_decode_boolean_and_integer():
    params = decode_arguments(find_function("_mzd_mul_naive"), ["4", "5", "6", "1"])
    assert params.boolean == 1
    params = decode_arguments(find_function("mzd_read_bits"), ["8", "8", "1", "2", "7"])
    assert params.integer == 7
    assert params.cols == [2]


def test_decode_invalid_boolean():
    with pytest.raises(UsageError) as info:
        decode_arguments(find_function("_mzd_mul_naive"), ["4", "5", "6", "2"])
    assert "Expected boolean: 2" in info.value.message


def test_decode_missing_arguments_gives_full_usage():
    with pytest.raises(UsageError) as info:
        decode_arguments(find_function("mzd_row_swap"), ["10"])
    assert info.value.usage == " m n r1 r2"
    assert "matrix size: n" in info.value.message


def test_decode_missing_index():
    with pytest.raises(UsageError) as info:
        decode_arguments(find_function("mzd_row_swap"), ["10", "10", "1"])
    assert "row index : r2" in info.value.message


def test_decode_too_many():
    with pytest.raises(UsageError) as info:
        decode_arguments(find_function("nothing"), ["1"])
    assert "too many parameters" in info.value.message


def test_decode_nothing_without_arguments():
    params = decode_arguments(find_function("nothing"), [])
    assert params.seen_sizes == []
    assert params.cutoff == -1


def test_decode_custom_spec_skips_one_dimension():
    spec = FunctionSpec("custom", "O1n,V1m", "mn", 10)
    params = decode_arguments(spec, ["3", "9"])
    assert params.seen_sizes == ["m", "n"]
    assert (params.m, params.n) == (3, 9)