from lfsr_keygen.search.taps import is_primitive_polynomial, search_primitive_taps


if __name__ == "__main__":
    for m in range(3, 13):
        res = search_primitive_taps(m)
        assert is_primitive_polynomial(m, res.taps)
        print(f"m={m:2d} taps={list(res.taps)} (tested {res.candidates_tested} candidates)")
