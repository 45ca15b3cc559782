import pytest

from typed_rest import PathParameters, QueryParameter, QueryParameterCollection


@pytest.fixture
def query() -> QueryParameterCollection:
    return QueryParameterCollection(
        [("Label", "MUU"), ("Desc", "What"), ("Misc", "Yesss"), ("ID", 11)]
    )


class TestPathParameters:
    def test_new_is_empty(self):
        sut = PathParameters()

        assert len(sut) == 0
        assert sut.is_empty

    def test_keyword_values_are_added(self):
        sut = PathParameters(Numero="Uno", Version=2)

        assert len(sut) == 2
        assert "Numero" in sut
        assert sut["Numero"] == "Uno"
        assert sut["Version"] == "2"
        assert not sut.is_empty

    def test_mapping_values_are_added_in_order(self):
        sut = PathParameters({"Uno": 1, "Duo": 2, "Tres": 3})

        assert sut.names == ["Uno", "Duo", "Tres"]
        assert list(sut.items()) == [("Uno", "1"), ("Duo", "2"), ("Tres", "3")]

    def test_none_value_renders_empty(self):
        sut = PathParameters(id=None)

        assert sut["id"] == ""

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_is_rejected(self, name):
        with pytest.raises(ValueError, match="cannot be null or empty"):
            PathParameters().add(name, 1)

    def test_duplicate_name_is_rejected(self):
        sut = PathParameters(id=1)

        with pytest.raises(ValueError, match="already added"):
            sut.add("id", 2)

    def test_unknown_name_raises_key_error(self):
        sut = PathParameters(id=1)

        with pytest.raises(KeyError):
            sut["key"]
        with pytest.raises(KeyError):
            sut["key"] = "abc"

    def test_existing_value_can_be_replaced(self):
        sut = PathParameters(id=1)
        sut["id"] = 42

        assert sut["id"] == "42"

    def test_remove_and_clear(self):
        sut = PathParameters(id=1, key="abc")

        sut.remove("id")
        assert sut.names == ["key"]

        sut.clear()
        assert sut.is_empty


class TestQueryParameter:
    def test_integer(self):
        sut = QueryParameter("Identifier", 1001)

        assert sut.name == "Identifier"
        assert sut.value == 1001
        assert str(sut) == "Identifier=1001"

    def test_string(self):
        assert str(QueryParameter("Label", "MUU")) == "Label=MUU"

    def test_non_ascii_is_percent_encoded(self):
        sut = QueryParameter("Label", "PčП@")

        assert sut.value == "PčП@"
        assert str(sut) == "Label=P%C4%8D%D0%9F%40"

    def test_pre_encoded_value_is_emitted_verbatim(self):
        sut = QueryParameter("Label", "PčП@", is_encoded=True)

        assert sut.is_encoded
        assert sut.value == "PčП@"
        assert str(sut) == "Label=PčП@"

    def test_space_is_encoded_as_percent_twenty(self):
        assert str(QueryParameter("Series", "IT Crowd")) == "Series=IT%20Crowd"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ([7, 11, 21], "Ids=7&Ids=11&Ids=21"),
            ((12, 23, 69), "Ids=12&Ids=23&Ids=69"),
            (["One", "Two", "Three"], "Ids=One&Ids=Two&Ids=Three"),
        ],
    )
    def test_multi_value_expands(self, value, expected):
        sut = QueryParameter("Ids", value)

        assert sut.value is value
        assert str(sut) == expected

    def test_none_elements_are_skipped(self):
        assert str(QueryParameter("Ids", [1, None, 3])) == "Ids=1&Ids=3"

    def test_none_scalar_renders_empty_value(self):
        assert str(QueryParameter("flag")) == "flag="

    def test_assigning_value_drops_encoded_form(self):
        sut = QueryParameter("Label", "a%20b", is_encoded=True)
        sut.value = "a b"

        assert not sut.is_encoded
        assert str(sut) == "Label=a%20b"

    @pytest.mark.parametrize("name", ["", " "])
    def test_blank_name_is_rejected(self, name):
        with pytest.raises(ValueError):
            QueryParameter(name, 1)


class TestQueryParameterCollection:
    class TestBuilding:
        def test_mapping(self):
            sut = QueryParameterCollection({"Identifier": 1001})

            assert str(sut) == "Identifier=1001"

        def test_parameter_objects(self):
            sut = QueryParameterCollection([QueryParameter("Identifier", 1001)])

            assert str(sut) == "Identifier=1001"

        def test_encoding(self):
            sut = QueryParameterCollection()
            sut.add("Label", "P--Ć--П--@")

            assert str(sut) == "Label=P--%C4%86--%D0%9F--%40"

        def test_pre_encoded(self):
            sut = QueryParameterCollection()
            sut.add("Label", "PĆK@", is_encoded=True)

            assert str(sut) == "Label=PĆK@"

        def test_repeated_names_keep_insertion_order(
            self, query: QueryParameterCollection
        ):
            query.add("Desc", "Happens")

            assert str(query) == "Label=MUU&Desc=What&Misc=Yesss&ID=11&Desc=Happens"

        def test_list_value_expands(self, query: QueryParameterCollection):
            query.remove("ID")
            query.add("IDs", [11, 17, 21])

            assert str(query) == "Label=MUU&Desc=What&Misc=Yesss&IDs=11&IDs=17&IDs=21"

        def test_empty_collection_renders_empty(self):
            assert str(QueryParameterCollection()) == ""

        def test_empty_list_value_adds_no_segment(self):
            query = QueryParameterCollection()
            query.add("a", 1)
            query.add("ids", [])
            query.add("b", 2)

            assert str(query[1]) == ""
            assert str(query) == "a=1&b=2"

    class TestLookup:
        def test_contains_key(self, query: QueryParameterCollection):
            assert query.contains_key("Misc")
            assert "Misc" in query
            assert not query.contains_key("Disc")

        def test_get_single_value(self, query: QueryParameterCollection):
            assert query["Misc"] == "Yesss"

        def test_get_missing_returns_none(self, query: QueryParameterCollection):
            assert query["Disc"] is None

        def test_get_repeated_returns_all_values(
            self, query: QueryParameterCollection
        ):
            query.add("Desc", "Happens")

            assert query["Desc"] == ["What", "Happens"]

        def test_get_by_position_returns_parameter(
            self, query: QueryParameterCollection
        ):
            parameter = query[1]

            assert isinstance(parameter, QueryParameter)
            assert parameter.name == "Desc"

    class TestRemoval:
        @pytest.mark.parametrize(
            "name,expected",
            [
                ("Label", "Desc=What&Misc=Yesss&ID=11"),
                ("Misc", "Label=MUU&Desc=What&ID=11"),
                ("ID", "Label=MUU&Desc=What&Misc=Yesss"),
            ],
        )
        def test_remove(self, query: QueryParameterCollection, name, expected):
            assert query.remove(name) == 1
            assert str(query) == expected

        def test_remove_every_occurrence(self, query: QueryParameterCollection):
            query.add("Desc", "Happens")

            assert query.remove("Desc") == 2
            assert not query.contains_key("Desc")

        def test_del_item(self, query: QueryParameterCollection):
            del query["Label"]

            assert str(query) == "Desc=What&Misc=Yesss&ID=11"

    class TestAssignment:
        def test_new_name_is_appended(self, query: QueryParameterCollection):
            query["Order"] = 3

            assert str(query) == "Label=MUU&Desc=What&Misc=Yesss&ID=11&Order=3"

        def test_new_parameter_is_appended(self, query: QueryParameterCollection):
            query["Order"] = QueryParameter("Order", 3)

            assert str(query) == "Label=MUU&Desc=What&Misc=Yesss&ID=11&Order=3"

        def test_value_is_replaced_in_place(self, query: QueryParameterCollection):
            query["Desc"] = "Eat This"

            assert str(query) == "Label=MUU&Desc=Eat%20This&Misc=Yesss&ID=11"

        def test_parameter_is_replaced_in_place(
            self, query: QueryParameterCollection
        ):
            query["Desc"] = QueryParameter("Desc", "Eat This")

            assert str(query) == "Label=MUU&Desc=Eat%20This&Misc=Yesss&ID=11"

        def test_none_removes(self, query: QueryParameterCollection):
            query["Desc"] = None

            assert str(query) == "Label=MUU&Misc=Yesss&ID=11"

        def test_list_rewrites_occurrences_positionally(
            self, query: QueryParameterCollection
        ):
            query.add("Desc", "Happens")

            query["Desc"] = ["First", None, "Third"]

            assert query["Desc"] == ["First", "Third"]
            assert str(query) == "Label=MUU&Desc=First&Misc=Yesss&ID=11&Desc=Third"

        def test_shorter_list_drops_extra_occurrences(
            self, query: QueryParameterCollection
        ):
            query.add("Desc", "Happens")

            query["Desc"] = ["Only"]

            assert str(query) == "Label=MUU&Desc=Only&Misc=Yesss&ID=11"
