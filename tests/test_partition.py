import pytest

from errchain.partition import Partition, partition, partition_text
from errchain.tokens import TokenizeError, render_tokens, tokenize


@pytest.mark.parametrize(
    "text",
    [
        "a - b <= 10",
        "*x == 2",
        "!x == 1",
        "-x == 1",
        "&x == &&2",
        "&mut x == *&&mut &2",
        "if false {}.t(1) == 2",
        "if false {} else {}.t(1) == 2",
        "if false {} else if false {}.t(1) == 2",
        "if let 1 = 2 {}.t(1) == 2",
        "if let 1 | 2 = 2 {}.t(1) == 2",
        "if let | 1 | 2 = 2 {}.t(1) == 2",
        "1 + loop { break 1 } == 1",
        "1 + 'a: loop { break 'a 1 } == 1",
        "while false {}.t(1) == 2",
        "while let None = Some(1) {}.t(1) == 2",
        "for _x in iter::once(0) {}.t(1) == 2",
        "for | _x in iter::once(0) {}.t(1) == 2",
        "for true | false in iter::empty() {}.t(1) == 2",
        "match 1 == 1 { true => 1, false => 0 } == 2",
        "while false == true && false {} < ()",
        "[false, false].len() > 3",
        "{ let x = 1; x } >= 3",
        "S + async { 1 } == true",
        "S + async move { 1 } == true",
        "S + unsafe { ptr::read(x) } == true",
        "crate::S.t(1) == 2",
        "::anyhow::Error::root_cause.t(1) == 2",
        "Error::msg::<&str>.t(1) == 2",
        "Error::msg::<&str,>.t(1) == 2",
        "Error::msg::<<str as ToOwned>::Owned>.t(1) == 2",
        "Chain::<'static>::new.t(1) == 2",
        "Chain::<'static,>::new.t(1) == 2",
        "f::<1>() != ()",
        "f::<-1>() != ()",
        "g::<u8, 1>() != ()",
        "g::<u8, -1>() != ()",
        "Generic::<dyn Debug + Sync> != Generic",
        "Generic::<dyn Fn() + Sync> != Generic",
        "Generic::<dyn Fn::() + ::std::marker::Sync> != Generic",
        'anyhow!("...").to_string().len() <= 1',
        "vec![1].len() < 1",
        'stringify! {} != ""',
        "(|| 1)() == 2",
        "b\"hmm\"[1] == b'c'",
        "PhantomData::<u8> {} != PhantomData",
        "result? == 2",
        "(2, 3).1 == 2",
        "err.is::<&str>() == false",
        "err.is::<<str as ToOwned>::Owned>() == true",
        '"" == format!("{:#?}", point)',
        "'\\0' as u8 > 1",
        "'\\0' as ::std::primitive::u8 > 1",
        "&[0] as &[i32] == [1]",
        "0 as *const () as *mut _ == 1 as *mut ()",
        "s as &str != s",
        "&s as &&str != &s",
        "s as &'static str != s",
        "&s as &&'static str != &s",
        "m as &mut str != s",
        "&m as &&mut str != &s",
        "&m as &&'static mut str != &s",
        "f as fn() as usize * 0 != 0",
        "f as fn() -> () as usize * 0 != 0",
        "f as for<'a> fn() as usize * 0 != 0",
        "f as unsafe fn() as usize * 0 != 0",
        'f as extern "Rust" fn() as usize * 0 != 0',
        "extern_fn as extern fn() as usize * 0 != 0",
        "f as fn() -> ! as usize * 0 != 0",
        "&0 as &dyn EqDebug<i32, Assoc = bool> != &0",
        "PhantomData as PhantomData<<i32 as ToOwned>::Owned> != PhantomData",
        "0 as int!(...) != 0",
        "0 as int![...] != 0",
        "if let ref mut _x @ 0 = 0 { 0 } else { 1 } == 1",
        "if let -1..=1 = 0 { 0 } else { 1 } == 1",
        "if let &0 = &0 { 0 } else { 1 } == 1",
        "if let &&0 = &&0 { 0 } else { 1 } == 1",
        "if let &mut 0 = &mut 0 { 0 } else { 1 } == 1",
        "if let &&mut 0 = &&mut 0 { 0 } else { 1 } == 1",
        "if let (0, 1) = (0, 1) { 0 } else { 1 } == 1",
        'if let [0] = b"\\0" { 0 } else { 1 } == 1',
        "if let P::<u8> {} = p { 0 } else { 1 } == 1",
        "if let ::std::marker::PhantomData = p {} != ()",
        "if let <S as Trait>::V = 0 { 0 } else { 1 } == 1",
        "for _ in iter::once(()) {} != ()",
        'if let stringify!(x) = "x" { 0 } else { 1 } == 1',
        "v + v == 1",
    ],
)
def test_partitioned_roundtrip(text):
    result = partition_text(text)
    assert result is not None
    assert result.describe() == text


@pytest.mark.parametrize(
    "text",
    [
        "false == true && false",
        "a <= b || a - b <= 10",
        "S + break 1 == 1",
        "S + move || 1 == 1",
        "S + || 1 == 1",
        "S + move |()| 1 == 1",
        "S + |()| 1 == 1",
        "false == false == true",
        " | ".join(["false"] * 63),
        "",
        "condition",
    ],
)
def test_fallback(text):
    assert partition_text(text) is None


def test_sides_and_operator():
    result = partition_text("a - b <= 10")
    assert result.op == "<="
    assert render_tokens(result.lhs) == "a - b"
    assert render_tokens(result.rhs) == "10"


def test_nested_tuple_field():
    result = partition_text("(2, (3, 4)). 1.1 == 2")
    assert result.op == "=="
    assert render_tokens(result.rhs) == "2"


def test_trailing_comma_allowed():
    assert partition_text("a == b,").describe() == "a == b"


def test_partition_accepts_tokens():
    result = partition(tokenize("x != y"))
    assert result == Partition(result.lhs, "!=", result.rhs)
    assert result.describe() == "x != y"


def test_out_of_fuel():
    text = "a" + " + a" * 200 + " == b"
    assert partition_text(text) is None


def test_malformed_text_raises():
    with pytest.raises(TokenizeError):
        partition_text("(a == b")