# velera

The core of a Game Boy Advance emulator in pure Python. It models the GBA
memory map and decodes ARM7TDMI instructions in ARM and Thumb state. It runs
a handful of ALU and multiply micro-operations and converts between the
console's colour and key formats. It has no dependencies outside the
standard library.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install .[test]
pytest
```

## Memory

`velera.memory.MMU` maps BIOS, work RAM, internal work RAM, I/O registers,
palette RAM, VRAM, OAM and cartridge ROM to their GBA addresses:

```python
from velera.memory import MMU, VRAM_ADDR

mmu = MMU()
mmu.store8(VRAM_ADDR, 0x1F)
assert mmu.load8(VRAM_ADDR) == 0x1F
```

- Reads from unmapped addresses return 0, and writes to them are ignored.
- Cartridge SRAM addresses raise `NotImplementedError`.
- `load16` and `load32` read the first byte as the most significant.
- `store16` and `store32` write the low byte first.

## Decoding ARM instructions

`velera.decode` splits a 32-bit ARM instruction into a `DecodedInstruction`
record:

```python
from velera.decode import base_to_decoded, get_instr, BaseInstruction

decoded = base_to_decoded(0xE0800001)
print(decoded.instr, decoded.rn, decoded.rd)
```

`get_instr` classifies an instruction without its condition field into a
`BaseInstruction` group. It raises `UndefinedInstructionError` for words that
fit no group. The per-group decoders are also public:

- `data_processing`
- `branch_exchange`
- `branch`
- `psr_transfer`
- `data_transfer`
- `multiply`
- `swap`
- `interrupt`

## Registers and execution

`velera.arm.ARM7TDMI` holds the register file together with the banked
registers for the FIQ, IRQ, supervisor, abort and undefined modes.
`load_register` and `store_register` pick the banked copy for the current
mode in `cpsr`. `PSR.unpack()` and `PSR.pack(value)` convert a status
register to and from its 32-bit encoding.

`velera.micro_ops` contains single-cycle operations that act on a CPU's
current decoded ARM instruction:

- branch helpers
- multiply and multiply-long variants
- `alu_master` for data processing

`velera.thumb.decode_thumb` matches a 16-bit Thumb instruction against the
opcode tables and returns its queue of micro-operations. It raises
`UndefinedInstructionError` when no opcode matches.

`velera.cpu.CPU` holds the memory, the register file and the execution
queue:

- `CPU.cycle()` runs one fetch, decode and execute step.
- `CPU.run_rom_max_cycle(path)` loads a ROM file with `read_rom_to_memory` and keeps cycling until `should_exit` is set.
- Decoding an ARM-state instruction raises `UnsupportedInstructionError`, because ARM instructions have no execution sequence yet.
- Fetching past the end of the ROM raises `IndexError`.

## Colours and keys

`velera.video.BGR555` and `velera.video.RGBA` convert between the GBA's
15-bit colour format and 24-bit RGB:

```python
from velera.video import BGR555, RGBA

rgb = RGBA.from_bgr555(BGR555(0b0000000000011111))
assert rgb.to_rgb() == (0xFF, 0, 0)
```

`InputStates.from_u16` and `InputStates.to_u16` convert key states to and
from a key register value.

## What it does not do

- There is no display. Nothing draws video memory to a screen or reads keys from a keyboard.
- There is no sound output.
- There is no command to run. The package is used as a library.
- Many ARM and Thumb instructions decode but do nothing when executed: Thumb instructions queue a no-op cycle, and ARM instructions raise `UnsupportedInstructionError`.