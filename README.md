# cminusc

`cminusc` is the middle part of a compiler for C-minus, a small C-like teaching
language. Given a syntax tree and a filled symbol table, it produces
three-address intermediate code (quadruples) and then maps the unlimited
temporaries of that code onto ten temporary registers, `t1` to `t10`.

## Modules

- `cminusc.symtab` – `SymbolTable`, a chained hash table of `Bucket` entries.
  `insert(name, structure, datatype, lineno, loc, scope, num_args, pass_by_ref)`
  adds a symbol, or only records the line number when the name is already
  visible from that scope (a symbol in scope `"global"` is visible everywhere).
  `lookup(name, scope)` returns the entry or `None`, iterating the table yields
  every entry, and `format()` returns a tabular listing. Symbols are described
  by `StructureId` and `DataType`; `structure_type_name` and `hash_key` are
  also available.
- `cminusc.tree` – syntax-tree nodes (`TreeNode`, `NodeKind`, `StmtKind`,
  `ExpKind`, `TokenType`), the constructors `new_stmt_node` and `new_exp_node`,
  `iter_siblings`, `token_text`, and the indented listings `format_tree` and
  `format_tree_c`.
- `cminusc.ir` – quadruple operands (`Arg`, `ArgKind` and the helpers
  `string_arg`, `const_arg`, `addr_arg`, `bucket_arg`), the numbered
  instruction list `IRList` with its `format()` and `write(stream)` listings,
  `NameGenerator` for labels (`L0`, `L1`, …), temporaries (`t0`, `t1`, …) and
  parameters (`Param0`, …), `LabelTable`, and `reg_name`.
- `cminusc.temporaries` – `TempAllocator` and `allocate_temporaries`, which
  rename temporaries in place onto the limited registers. When a register is
  freed for the first time and the allocator has a symbol table, the register
  name is declared there as a global integer.
- `cminusc.expressions` – `ExpressionGenerator`, code for expressions
  (array accesses and arithmetic or comparison operators).
- `cminusc.cgen` – `CodeGenerator`, which adds statements (if, while,
  assignment, function, parameter, call, inline assembly, return), and
  `code_gen(tree, symtab, output)`, which generates a whole program, closes
  `main` with an `end_function`, allocates temporaries and writes the listing.
  A reference to an undeclared name where a symbol is required raises
  `LookupError`.
- `cminusc.includes` – `IncludeResolver`. `add(file_name, line_number)` records
  an include given as `"name"` or `<name>` (the latter under the library path,
  `lib` by default); `expand(source_path, dest_path)` writes the source with
  each recorded include line replaced by the file's contents. Duplicate
  includes, two includes on one line and missing files raise `IncludeError`.
- `cminusc.tiny_scan` – `TinyScanner`, a hand-written scanner for the TINY
  language that yields `Token` values typed by `TinyToken`.

## Using it

```python
import io

from cminusc.cgen import code_gen
from cminusc.symtab import SymbolTable

symtab = SymbolTable()
# ... fill symtab and build `tree` with new_stmt_node / new_exp_node ...
out = io.StringIO()
code_gen(tree, symtab, out)
print(out.getvalue())
```

The listing starts with a banner, then the number of quadruples, then one line
per quadruple such as `[3] (str=sum ,var=x ,var=y ,str=t1 )`. The last
quadruple is printed without the `var=`/`str=`/`const=` prefixes.

Working with the pieces directly:

```python
from cminusc.ir import IRList, NameGenerator, const_arg, string_arg

names = NameGenerator()
code = IRList()
code.append(string_arg("assign_id_const"), const_arg(4),
            string_arg("_"), string_arg(names.new_temp()))
print(code.format())
```

## What it does not do

There is no C-minus scanner or parser here, and no semantic analysis or type
checking: syntax trees and symbol tables must be built by the caller. The
package stops at intermediate code; it does not produce assembly or machine
code, and it provides no command-line program.

## Tests

The test suite uses pytest and is installed with the `test` extra.