"""
Schema definitions employed to validate the structure of a received execution request body.

Only the structure required to locate the inputs and outputs definitions is validated. Contents of each input
(its value, format and bounding box) are preserved as is, since their decoding is handled according to their shape
by :class:`spindle.deserializer.ExecuteDeserializer`.
"""
# pylint: disable=C0103,invalid-name
import colander
from colander import OneOf, drop

from spindle.execute import ExecuteMode, ExecuteResponse


class PermissiveMappingSchema(colander.MappingSchema):
    """
    Object schema that will ``preserve`` any unknown field to remain present in the resulting deserialization.

    Other fields that are explicitly specified with sub-schema nodes will still be validated as per usual behaviour.
    """

    @staticmethod
    def schema_type():
        return colander.Mapping(unknown="preserve")


class PermissiveMappingNode(colander.SchemaNode):
    """
    Object of arbitrary contents. Only the fact that the contents are an object is validated.
    """

    @staticmethod
    def schema_type():
        return colander.Mapping(unknown="preserve")


class Identifier(colander.SchemaNode):
    schema_type = colander.String
    description = "Identifier of the input or output of the process."
    example = "input-1"


class Format(PermissiveMappingSchema):
    description = "Media-type, encoding and schema of the data."
    mimeType = colander.SchemaNode(colander.String(allow_empty=True), missing=drop, example="application/json")
    encoding = colander.SchemaNode(colander.String(allow_empty=True), missing=drop, example="UTF-8")
    schema = colander.SchemaNode(colander.String(allow_empty=True), missing=drop)


class ExecuteInput(PermissiveMappingSchema):
    id = Identifier()
    input = PermissiveMappingNode(
        missing=drop,
        description="Data of the input, provided either as 'value' (inline or reference) or as 'bbox'.",
    )


class ExecuteInputList(colander.SequenceSchema):
    input_item = ExecuteInput()


class ExecuteOutput(PermissiveMappingSchema):
    id = Identifier()
    format = Format(missing=drop)
    transmissionMode = colander.SchemaNode(
        colander.String(allow_empty=True),
        missing=drop,
        description="Desired transmission of the output. Any token other than 'value' results in 'reference'.",
        example="value",
    )


class ExecuteOutputList(colander.SequenceSchema):
    output_item = ExecuteOutput()


class Execute(PermissiveMappingSchema):
    description = "Execution request of a process."
    inputs = ExecuteInputList(missing=drop)
    outputs = ExecuteOutputList(missing=drop)
    mode = colander.SchemaNode(colander.String(), validator=OneOf(ExecuteMode.values()), missing=drop)
    response = colander.SchemaNode(colander.String(), validator=OneOf(ExecuteResponse.values()), missing=drop)
