"""Tests for SDLGenerator and canonical text output."""

from pathlib import Path

from prisma_sdl import (
    Attribute,
    AttributeArgument,
    Datasource,
    Document,
    Enum,
    Field,
    Generator,
    Model,
    ModelAttribute,
    ModelAttributeArgument,
    SDLGenerator,
    generate_document,
    generate_enum,
    generate_model,
    parse_document,
)
from prisma_sdl.schemas.arguments import LiteralValue

FIXTURES_DIR = Path(__file__).parent / "fixtures"

DEFAULT_DATASOURCE_TEXT = (
    "datasource db {\n"
    '  provider = "postgresql"\n'
    '  url      = env("DATABASE_URL")\n'
    "}"
)
DEFAULT_GENERATOR_TEXT = (
    "generator client {\n"
    '  provider = "prisma-client-js"\n'
    '  binaryTargets = ["native"]\n'
    "}"
)


class TestConfigBlocks:
    """Test cases for datasource and generator rendering."""

    def test_default_datasource(self) -> None:
        text = SDLGenerator().generate_datasource(Datasource())

        assert text == DEFAULT_DATASOURCE_TEXT

    def test_default_generator(self) -> None:
        assert SDLGenerator().generate_generator(Generator()) == DEFAULT_GENERATOR_TEXT

    def test_generator_optional_lines(self) -> None:
        """Test output and previewFeatures lines and the empty targets case."""
        generator = Generator(
            name="js",
            output="../generated",
            preview_features=["fullTextSearch", "metrics"],
            binary_targets=[],
        )

        text = SDLGenerator().generate_generator(generator)

        assert text == (
            "generator js {\n"
            '  provider = "prisma-client-js"\n'
            '  output = "../generated"\n'
            '  previewFeatures = ["fullTextSearch", "metrics"]\n'
            "  binaryTargets = []\n"
            "}"
        )

    def test_empty_document(self) -> None:
        """Test that an empty document renders only the config blocks."""
        text = generate_document(Document())

        assert text == f"{DEFAULT_DATASOURCE_TEXT}\n\n{DEFAULT_GENERATOR_TEXT}"


class TestFieldRendering:
    """Test cases for field and attribute rendering."""

    def test_markers(self) -> None:
        generator = SDLGenerator()
        optional = Field(name="age", type="Int", is_required=False)
        listed = Field(name="tags", type="String", is_list=True)

        assert generator.render_field(optional) == "  age Int?"
        assert generator.render_field(listed) == "  tags String[]"

    def test_bare_attribute(self) -> None:
        field = Field(name="id", type="Int", attributes=[Attribute(name="id")])

        assert SDLGenerator().render_field(field) == "  id Int @id"

    def test_default_expression(self) -> None:
        attribute = Attribute(
            name="default", arguments=[AttributeArgument.expression("now()")]
        )

        assert SDLGenerator().render_attribute(attribute) == "@default(now())"

    def test_default_repairs_unclosed_call(self) -> None:
        """Test that a default whose call lost its parenthesis is closed."""
        attribute = Attribute(
            name="default", arguments=[AttributeArgument.expression("now(")]
        )

        assert SDLGenerator().render_attribute(attribute) == "@default(now())"

    def test_unquoted_literal_is_quoted(self) -> None:
        argument = AttributeArgument(value=LiteralValue(text="guest"))
        attribute = Attribute(name="default", arguments=[argument])

        assert SDLGenerator().render_attribute(attribute) == '@default("guest")'

    def test_quoted_literal_kept(self) -> None:
        attribute = Attribute(
            name="map", arguments=[AttributeArgument.literal("user_id")]
        )

        assert SDLGenerator().render_attribute(attribute) == '@map("user_id")'

    def test_db_attribute(self) -> None:
        generator = SDLGenerator()
        varchar = Attribute(
            name="db", arguments=[AttributeArgument.expression("VarChar(255)")]
        )

        assert generator.render_attribute(varchar) == "@db.VarChar(255)"
        assert generator.render_attribute(Attribute(name="db")) == ""

    def test_empty_db_attribute_is_dropped_from_line(self) -> None:
        field = Field(
            name="bio",
            type="String",
            attributes=[Attribute(name="db"), Attribute(name="unique")],
        )

        assert SDLGenerator().render_field(field) == "  bio String @unique"

    def test_relation_named_arguments(self) -> None:
        attribute = Attribute(
            name="relation",
            arguments=[
                AttributeArgument.expression("[authorId]", name="fields"),
                AttributeArgument.expression("[id]", name="references"),
            ],
        )

        assert SDLGenerator().render_attribute(attribute) == (
            "@relation(fields: [authorId], references: [id])"
        )

    def test_relation_positional_argument(self) -> None:
        """Test that a positional relation name is rendered with its name."""
        attribute = Attribute(
            name="relation", arguments=[AttributeArgument.literal("UserPosts")]
        )

        assert SDLGenerator().render_attribute(attribute) == (
            '@relation(value: "UserPosts")'
        )

    def test_generic_named_arguments_drop_names(self) -> None:
        attribute = Attribute(
            name="default",
            arguments=[AttributeArgument.expression("1", name="value")],
        )

        assert SDLGenerator().render_attribute(attribute) == "@default(1)"


class TestModelAndEnum:
    """Test cases for model and enum blocks."""

    def test_model_attribute_layout(self) -> None:
        """Test that each model attribute is preceded by a blank line."""
        model = Model(
            name="User",
            fields=[Field(name="id", type="Int", attributes=[Attribute(name="id")])],
            attributes=[
                ModelAttribute(
                    type="index",
                    arguments=[ModelAttributeArgument.expression("[email]")],
                ),
                ModelAttribute(
                    type="map", arguments=[ModelAttributeArgument.literal("users")]
                ),
            ],
        )

        assert generate_model(model) == (
            'model User {\n  id Int @id\n\n  @@index([email])\n\n  @@map("users")\n}'
        )

    def test_model_attribute_drops_argument_names(self) -> None:
        attribute = ModelAttribute(
            type="unique",
            arguments=[
                ModelAttributeArgument.expression("[a, b]", name="fields"),
                ModelAttributeArgument.literal("ab", name="name"),
            ],
        )

        assert SDLGenerator().render_model_attribute(attribute) == (
            '\n  @@unique([a, b], "ab")'
        )

    def test_model_attribute_without_arguments(self) -> None:
        attribute = ModelAttribute(type="ignore")

        assert SDLGenerator().render_model_attribute(attribute) == "\n  @@ignore"

    def test_enum(self) -> None:
        enum = Enum(name="Role", values=["USER", "ADMIN"])

        assert generate_enum(enum) == "enum Role {\n  USER\n  ADMIN\n}"

    def test_section_order(self) -> None:
        """Test that config comes first, then models, then enums."""
        document = Document(
            models=[Model(name="A"), Model(name="B")],
            enums=[Enum(name="E", values=["X"])],
        )

        text = generate_document(document)

        assert text.index("datasource") < text.index("generator")
        assert text.index("generator") < text.index("model A")
        assert text.index("model A") < text.index("model B")
        assert text.index("model B") < text.index("enum E")
        assert not text.endswith("\n")


class TestGenerate:
    """Test cases for SDLGenerator.generate and validate_output."""

    def test_generate_returns_named_file(self) -> None:
        files = SDLGenerator().generate(Document())

        assert list(files) == ["schema.prisma"]
        assert files["schema.prisma"].endswith("}\n")

    def test_custom_filename_without_formatting(self) -> None:
        files = SDLGenerator(filename="app.prisma", format_output=False).generate(
            Document()
        )

        assert not files["app.prisma"].endswith("\n")

    def test_validate_output(self) -> None:
        generator = SDLGenerator()

        assert generator.validate_output(generate_document(Document())) == (True, "")
        assert generator.validate_output("") == (True, "")
        is_valid, message = generator.validate_output("nothing to see")
        assert not is_valid
        assert "No datasource" in message

    def test_write_files(self, tmp_path: Path) -> None:
        generator = SDLGenerator()
        target = tmp_path / "out" / "schema.prisma"

        written, errors = generator.write_files(
            {target: "enum E {\n  X\n}\n"}, verbose=False
        )

        assert written == [target]
        assert errors == []
        assert target.read_text(encoding="utf-8") == "enum E {\n  X\n}\n"

    def test_write_files_dry_run(self, tmp_path: Path) -> None:
        target = tmp_path / "schema.prisma"

        written, _ = SDLGenerator().write_files(
            {target: "enum E {\n  X\n}\n"}, dry_run=True, verbose=False
        )

        assert written == [target]
        assert not target.exists()


class TestRoundTrip:
    """Test cases for parse/generate round trips."""

    def test_fixture_round_trip_is_stable(self) -> None:
        """Test that generating, parsing and generating again is idempotent."""
        source = (FIXTURES_DIR / "blog.prisma").read_text(encoding="utf-8")

        first = generate_document(parse_document(source))
        second = generate_document(parse_document(first))

        assert first == second

    def test_round_trip_preserves_structure(self) -> None:
        source = (FIXTURES_DIR / "blog.prisma").read_text(encoding="utf-8")
        document = parse_document(source)

        reparsed = parse_document(generate_document(document))

        assert reparsed.structurally_equal(document)

    def test_canonical_field_line(self) -> None:
        source = (FIXTURES_DIR / "blog.prisma").read_text(encoding="utf-8")

        text = generate_document(parse_document(source))

        assert "  id Int @id @default(autoincrement())" in text
        assert "  email String @unique @db.VarChar(255)" in text
        assert "  author User @relation(fields: [authorId], references: [id])" in text
        assert "//" not in text

    def test_literal_model_text(self) -> None:
        """Test that the minimal User model reproduces its own text."""
        source = (
            "model User {\n"
            "  id String @id @default(cuid())\n"
            "  name String\n"
            "}"
        )

        document = parse_document(source)

        assert generate_model(document.models[0]) == source

    def test_built_document_round_trip(self) -> None:
        """Test that parse(generate(D)) equals D for a document built in code."""
        document = Document(
            datasource=Datasource(provider="mysql", url='"mysql://localhost/app"'),
            generator=Generator(output="./client", preview_features=["metrics"]),
            models=[
                Model(
                    name="Post",
                    fields=[
                        Field(
                            name="id",
                            type="Int",
                            attributes=[
                                Attribute(name="id"),
                                Attribute(
                                    name="default",
                                    arguments=[
                                        AttributeArgument.expression("autoincrement()")
                                    ],
                                ),
                            ],
                        ),
                        Field(
                            name="slug",
                            type="String",
                            attributes=[
                                Attribute(
                                    name="map",
                                    arguments=[AttributeArgument.literal("post_slug")],
                                )
                            ],
                        ),
                        Field(name="author", type="User", is_required=False),
                        Field(name="tags", type="Tag", is_list=True),
                    ],
                    attributes=[
                        ModelAttribute(
                            type="index",
                            arguments=[ModelAttributeArgument.expression("[slug]")],
                        )
                    ],
                )
            ],
            enums=[Enum(name="Status", values=["DRAFT", "PUBLISHED"])],
        )

        reparsed = parse_document(generate_document(document))

        assert reparsed.structurally_equal(document)

    def test_non_default_generator_is_stable(self) -> None:
        """Test that generation is a fixed point for a non-default generator."""
        document = Document(
            generator=Generator(
                name="js",
                output="./client",
                preview_features=["fullTextSearch"],
                binary_targets=[],
            )
        )

        first = generate_document(document)
        reparsed = parse_document(first)

        assert generate_document(reparsed) == first
        assert reparsed.structurally_equal(document)
        assert reparsed.generator.binary_targets == []

    def test_empty_output_survives_round_trip(self) -> None:
        document = Document(generator=Generator(output=""))

        reparsed = parse_document(generate_document(document))

        assert reparsed.generator.output == ""
