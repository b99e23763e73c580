"""
Example module builder for proof-of-concept.

Builds the forms of a small `family` module, as an external parser would
produce them: a header, three rules (one with a generator, one with a
guard), an ordinary helper function and an interleaved attribute.
"""
from henshin.expressions import (
    Atom,
    BinaryGenerator,
    BinaryOp,
    Call,
    Generator,
    Remote,
    TupleExpr,
    Var,
)
from henshin.model import (
    Attribute,
    Clause,
    Eof,
    FileAttribute,
    Function,
    ModuleAttribute,
    Rule,
)


def build_example_family_module(with_errors: bool = False) -> list:
    """
    Args:
        with_errors: declare the module with parameters and add a rule
            containing a binary generator, so the transform reports both
            error kinds
    """
    params = ("Db",) if with_errors else None
    forms = [
        FileAttribute(file="family.erl", line=1, pos=1),
        ModuleAttribute(module="family", parameters=params, pos=1),
        Attribute(name="author", value="henshin", pos=2),
    ]

    # parent(P, C) :- {P, C} <- family_db:parents().
    parents = Call(
        function=Remote(Atom("family_db", 5), Atom("parents", 5), 5),
        arguments=(),
        pos=5,
    )
    forms.append(Rule(
        name="parent",
        clauses=(
            Clause(
                patterns=(Var("P", 4), Var("C", 4)),
                guard=None,
                body=(Generator(TupleExpr((Var("P", 5), Var("C", 5)), 5), parents, 5),),
                pos=4,
            ),
        ),
        pos=4,
    ))

    # ancestor(A, D) :- parent(A, D).
    # ancestor(A, D) :- parent(A, C), ancestor(C, D).
    forms.append(Rule(
        name="ancestor",
        clauses=(
            Clause(
                patterns=(Var("A", 7), Var("D", 7)),
                guard=None,
                body=(Call(Atom("parent", 8), (Var("A", 8), Var("D", 8)), 8),),
                pos=7,
            ),
            Clause(
                patterns=(Var("A", 9), Var("D", 9)),
                guard=None,
                body=(
                    Call(Atom("parent", 10), (Var("A", 10), Var("C", 10)), 10),
                    Call(Atom("ancestor", 11), (Var("C", 11), Var("D", 11)), 11),
                ),
                pos=9,
            ),
        ),
        pos=7,
    ))

    # count(L) -> length(L).
    forms.append(Function(
        name="count",
        clauses=(
            Clause(
                patterns=(Var("L", 13),),
                guard=None,
                body=(Call(Atom("length", 13), (Var("L", 13),), 13),),
                pos=13,
            ),
        ),
        pos=13,
    ))

    forms.append(Attribute(name="vsn", value=1, pos=15))

    # sibling(A, B) when A =/= B :- parent(P, A), parent(P, B).
    forms.append(Rule(
        name="sibling",
        clauses=(
            Clause(
                patterns=(Var("A", 17), Var("B", 17)),
                guard=BinaryOp("=/=", Var("A", 17), Var("B", 17), 17),
                body=(
                    Call(Atom("parent", 18), (Var("P", 18), Var("A", 18)), 18),
                    Call(Atom("parent", 19), (Var("P", 19), Var("B", 19)), 19),
                ),
                pos=17,
            ),
        ),
        pos=17,
    ))

    if with_errors:
        # byte(B) :- B <= Bin.
        forms.append(Rule(
            name="byte",
            clauses=(
                Clause(
                    patterns=(Var("B", 21),),
                    guard=None,
                    body=(BinaryGenerator(Var("B", 22), Var("Bin", 22), 22),),
                    pos=21,
                ),
            ),
            pos=21,
        ))

    forms.append(Eof(pos=24))
    return forms
