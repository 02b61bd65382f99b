"""Parsing of Java class files: reader, constant pool, attributes and members."""