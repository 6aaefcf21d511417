"""
# Stowaway: hide messages inside PNG files.

A PNG file is a signature followed by a list of chunks: the viewers skip the
ancillary chunks they don't know about, so a chunk of our own is a good place
where to keep a message without breaking the image.

The formats are described declaratively: a format is a Chunk subclass whose
class attributes are fields, and two basic main operations are defined for
the format and its sub components:

 1. unpack(): reading the binary data and build a high-level representation of that.
    The fields are read one after the other from the actual position of the stream.

 2. pack(): encode the high-level representation into binary data.

to these we add one more

 3. relayout(): trigger a recursive layout "negotiation" between a component
    and its subcomponents so to have offset and size set in the correct way.
    A packing also implies a relayouting.

If we define a "field" as something with "direct representation" and without
subcomponents we can see that the relayouting doesn't impact on it.
"""
