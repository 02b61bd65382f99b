"""JVM bytecode instructions, their operand decoding and the opcode factory."""